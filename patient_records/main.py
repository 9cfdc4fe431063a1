"""Development stand-in for the patient record service.

Serves the record service's HTTP contract from memory so the console can be
run and tested without the real backend:

    python -m patient_records.main
"""

import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from patient_records import __version__
from patient_records.api.endpoints import ServiceError, router

app = FastAPI(
    title="Patient Record Service (development)",
    description="In-memory patient record service for local runs and tests of the patient console.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    tags_metadata=[
        {
            "name": "Patients",
            "description": "List, search, create, update and delete patient records.",
        },
        {
            "name": "Health",
            "description": "Service health monitoring and status checks.",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.as_payload())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [f"{error['loc'][-1]}: {error['msg']}" for error in exc.errors()]
    payload = ServiceError(400, "Validation failed", errors=errors).as_payload()
    return JSONResponse(status_code=400, content=payload)


app.include_router(router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("patient_records.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "3001")), log_level="info")
