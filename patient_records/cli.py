#!/usr/bin/env python3
"""Interactive terminal screen for managing patient records."""

import asyncio
import sys

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from patient_records.clients.records import RecordServiceClient, RecordServiceConfig
from patient_records.models.patient import BLOOD_GROUP_OPTIONS, SEX_OPTIONS, Patient
from patient_records.services.screen import PatientScreen
from patient_records.utils.formatting import format_date, format_timestamp
from patient_records.utils.logging import LogConfig, setup_logging

FIELD_LABELS: dict[str, str] = {
    "name": "Full name",
    "nik": "NIK (16 digits)",
    "date_of_birth": "Date of birth (YYYY-MM-DD)",
    "sex": "Sex",
    "phone": "Phone number",
    "blood_group": "Blood group",
    "email": "Email (optional)",
    "address": "Address",
}

FIELD_CHOICES: dict[str, tuple[str, ...]] = {
    "sex": SEX_OPTIONS,
    "blood_group": BLOOD_GROUP_OPTIONS,
}


class PatientsCLI:
    """Terminal front end for the patient screen."""

    def __init__(
        self,
        base_url: str | None = None,
        console: Console | None = None,
        client: RecordServiceClient | None = None,
    ):
        """Initialize the CLI.

        Args:
            base_url: Record service address, overriding the configured default
            console: Console to render to
            client: Ready-made record service client, used instead of base_url
        """
        if client is None:
            config = RecordServiceConfig(base_url=base_url) if base_url else RecordServiceConfig()
            client = RecordServiceClient(config)
        self.client = client
        self.screen = PatientScreen(client=self.client)
        self.console = console or Console()

    def start(self) -> None:
        """Run the interactive session until the user quits."""
        asyncio.run(self.run())

    async def run(self) -> None:
        self.console.print(
            Panel.fit(
                "[bold blue]🏥 Patient Management System[/bold blue]\n"
                f"Record service: {self.client.config.base_url}\n"
                "Type [bold]help[/bold] for commands.",
                border_style="blue",
            )
        )

        try:
            await self.screen.refresh()
            while True:
                self.render()
                command = Prompt.ask("\n[bold cyan]>[/bold cyan]", console=self.console).strip()
                if not await self.handle_command(command):
                    break
        except KeyboardInterrupt:
            pass
        finally:
            self.console.print("\n[yellow]👋 Goodbye![/yellow]")
            await self.client.aclose()

    async def handle_command(self, command: str) -> bool:
        """Dispatch one command line. Returns False when the user wants to quit."""
        verb, _, argument = command.partition(" ")
        verb = verb.lower()
        argument = argument.strip()

        if verb in ("quit", "exit", "q"):
            return False
        if verb == "help":
            self._show_help()
        elif verb == "add":
            self.screen.open_create_form()
            await self._run_form()
        elif verb == "edit":
            patient = self._pick(argument)
            if patient:
                self.screen.start_edit(patient)
                await self._run_form()
        elif verb == "delete":
            patient = self._pick(argument)
            if patient and Confirm.ask(
                f"Are you sure you want to delete patient data for {patient.name}?", console=self.console
            ):
                await self.screen.delete(patient)
        elif verb == "show":
            patient = self._pick(argument)
            if patient and await self.screen.load_detail(patient.id):
                self._show_detail(self.screen.selected)
        elif verb == "search":
            self.screen.set_search(argument)
        elif verb == "clear":
            self.screen.set_search("")
        elif verb == "refresh":
            await self.screen.refresh()
        elif verb:
            self.console.print(f"[red]Unknown command: {verb}. Type help for commands.[/red]")
        return True

    def render(self) -> None:
        """Print banners and the patient table."""
        if self.screen.success_message:
            self.console.print(f"[green]✅ {self.screen.success_message}[/green]")
        if self.screen.error_message:
            self.console.print(f"[red]❌ {self.screen.error_message}[/red]")

        self.console.print(self.build_table())

        self.screen.success_message = ""
        self.screen.error_message = ""

    def build_table(self) -> Table | Panel:
        """The patient list, or a placeholder when it is loading or empty."""
        if self.screen.loading:
            return Panel("Loading data...", border_style="dim")

        patients = self.screen.visible_patients
        if not patients:
            return Panel(
                "No patient data\n[dim]Use [bold]add[/bold] to add a new patient[/dim]",
                title=f"📋 Patient List ({len(patients)})",
                border_style="dim",
            )

        title = f"📋 Patient List ({len(patients)})"
        if self.screen.search_keyword:
            title += f" matching '{self.screen.search_keyword}'"

        table = Table(title=title, show_lines=False)
        table.add_column("No", justify="right")
        table.add_column("Name", style="bold")
        table.add_column("NIK")
        table.add_column("Date of birth")
        table.add_column("Sex")
        table.add_column("Phone")
        table.add_column("Blood group", style="red")

        for index, patient in enumerate(patients, start=1):
            table.add_row(
                str(index),
                patient.name,
                patient.nik,
                format_date(patient.date_of_birth),
                patient.sex,
                patient.phone,
                patient.blood_group,
            )
        return table

    def _pick(self, argument: str) -> Patient | None:
        """Resolve a row number of the visible list to a patient."""
        patients = self.screen.visible_patients
        if not patients:
            self.console.print("[red]No patients listed.[/red]")
            return None
        if not argument.isdigit() or not 1 <= int(argument) <= len(patients):
            self.console.print(f"[red]Pick a row number between 1 and {len(patients)}.[/red]")
            return None
        return patients[int(argument) - 1]

    async def _run_form(self) -> None:
        """Prompt for every field and submit until saved or abandoned."""
        title = "✏️ Edit Patient Data" if self.screen.is_editing else "📝 Add Patient Form"

        while self.screen.show_form:
            self.console.print(Panel.fit(title, border_style="cyan"))
            for field_name, label in FIELD_LABELS.items():
                current = getattr(self.screen.draft, field_name)
                error = self.screen.errors.get(field_name)
                if error:
                    self.console.print(f"[red]  {error}[/red]")
                value = Prompt.ask(
                    label,
                    console=self.console,
                    default=current,
                    choices=list(FIELD_CHOICES[field_name]) if field_name in FIELD_CHOICES else None,
                    show_default=bool(current),
                )
                self.screen.update_field(field_name, value)

            if await self.screen.submit():
                return

            if self.screen.error_message:
                self.console.print(f"[red]❌ {self.screen.error_message}[/red]")
                self.screen.error_message = ""
            for field_name, error in self.screen.errors.items():
                self.console.print(f"[red]• {FIELD_LABELS[field_name]}: {error}[/red]")

            if not Confirm.ask("Fix the form and submit again?", console=self.console, default=True):
                self.screen.cancel_form()

    def _show_detail(self, patient: Patient) -> None:
        lines = [
            f"[bold]{patient.name}[/bold]",
            f"NIK: {patient.nik}",
            f"Date of birth: {format_date(patient.date_of_birth)}",
            f"Sex: {patient.sex}",
            f"Blood group: {patient.blood_group}",
            f"Phone: {patient.phone}",
            f"Email: {patient.email or '-'}",
            f"Address: {patient.address}",
            "",
            f"[dim]Created {format_timestamp(patient.created_at)}, "
            f"updated {format_timestamp(patient.updated_at)}[/dim]",
        ]
        self.console.print(Panel("\n".join(lines), title=f"Patient #{patient.id}", border_style="green"))

    def _show_help(self) -> None:
        help_text = """
[bold]Available Commands:[/bold]
• add - Add a new patient
• edit <no> - Edit the patient in row <no>
• delete <no> - Delete the patient in row <no>
• show <no> - Show full details of the patient in row <no>
• search <keyword> - Filter the list by name or NIK
• clear - Clear the search filter
• refresh - Reload the list from the record service
• quit - Exit

[bold]Tips:[/bold]
• Row numbers refer to the list as currently filtered
• While filling the form, press Enter to keep the shown value
        """

        self.console.print(Panel(help_text.strip(), title="[cyan]❓ Help[/cyan]", border_style="cyan"))


def main():
    """Main entry point for the patients CLI."""
    setup_logging(LogConfig(level="WARNING"))
    base_url = sys.argv[1] if len(sys.argv) > 1 else None

    cli = PatientsCLI(base_url)
    cli.start()


if __name__ == "__main__":
    main()
