"""Clients for external services."""

from patient_records.clients.records import RecordServiceClient, RecordServiceConfig, RecordServiceError

__all__ = ["RecordServiceClient", "RecordServiceConfig", "RecordServiceError"]
