"""Tests for the terminal patient screen."""

from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from patient_records.cli import FIELD_LABELS, PatientsCLI


@pytest.fixture
def cli(record_client):
    """CLI rendering into a buffer, backed by the development record service."""
    console = Console(file=StringIO(), width=160, force_terminal=False)
    return PatientsCLI(console=console, client=record_client)


def output(cli: PatientsCLI) -> str:
    return cli.console.file.getvalue()


def answers(values: dict[str, str]):
    """Prompt.ask replacement answering form prompts by label."""
    by_label = {FIELD_LABELS[name]: value for name, value in values.items()}

    def ask(label, *args, default="", **kwargs):
        return by_label.get(label, default)

    return ask


class TestRendering:
    """Tests for the list rendering."""

    @pytest.mark.asyncio
    async def test_table_lists_visible_patients(self, cli):
        """Test that the table has one numbered row per visible patient."""
        await cli.screen.refresh()
        table = cli.build_table()
        assert isinstance(table, Table)
        assert table.row_count == 3

        cli.console.print(table)
        text = output(cli)
        assert "Budi Santoso" in text
        assert "12 Maret 1985" in text

    @pytest.mark.asyncio
    async def test_empty_list_placeholder(self, cli):
        """Test that an empty result shows the placeholder panel."""
        await cli.screen.refresh()
        cli.screen.set_search("nobody")
        assert isinstance(cli.build_table(), Panel)

    @pytest.mark.asyncio
    async def test_loading_placeholder(self, cli):
        """Test that the list shows a loading panel before the first fetch."""
        assert isinstance(cli.build_table(), Panel)

    @pytest.mark.asyncio
    async def test_render_prints_and_clears_banners(self, cli):
        """Test that banners are shown once."""
        await cli.screen.refresh()
        cli.screen.success_message = "Saved"
        cli.render()
        assert "Saved" in output(cli)
        assert cli.screen.success_message == ""


class TestCommands:
    """Tests for command dispatch."""

    @pytest.mark.asyncio
    async def test_quit(self, cli):
        """Test that quit ends the loop."""
        assert await cli.handle_command("quit") is False
        assert await cli.handle_command("exit") is False

    @pytest.mark.asyncio
    async def test_search_and_clear(self, cli):
        """Test that search filters the rows and clear restores them."""
        await cli.screen.refresh()
        assert await cli.handle_command("search bu") is True
        assert [p.name for p in cli.screen.visible_patients] == ["Budi Santoso"]

        await cli.handle_command("clear")
        assert len(cli.screen.visible_patients) == 3

    @pytest.mark.asyncio
    async def test_delete_confirmed(self, cli):
        """Test that a confirmed delete removes the row."""
        await cli.screen.refresh()
        with patch("patient_records.cli.Confirm.ask", return_value=True) as confirm:
            await cli.handle_command("delete 2")

        assert "Sari Wulandari" in confirm.call_args.args[0]
        assert "Sari Wulandari" not in [p.name for p in cli.screen.patients]

    @pytest.mark.asyncio
    async def test_delete_declined(self, cli):
        """Test that a declined delete leaves the list alone."""
        await cli.screen.refresh()
        with patch("patient_records.cli.Confirm.ask", return_value=False):
            await cli.handle_command("delete 1")
        assert len(cli.screen.patients) == 3

    @pytest.mark.asyncio
    async def test_row_numbers_follow_filter(self, cli):
        """Test that row numbers refer to the filtered view."""
        await cli.screen.refresh()
        await cli.handle_command("search agus")
        with patch("patient_records.cli.Confirm.ask", return_value=True):
            await cli.handle_command("delete 1")
        assert "Agus Prasetyo" not in [p.name for p in cli.screen.patients]
        assert len(cli.screen.patients) == 2

    @pytest.mark.asyncio
    async def test_bad_row_number(self, cli):
        """Test that out-of-range rows are reported and nothing happens."""
        await cli.screen.refresh()
        await cli.handle_command("edit 9")
        assert "Pick a row number" in output(cli)
        assert cli.screen.show_form is False

    @pytest.mark.asyncio
    async def test_show_detail(self, cli):
        """Test that show renders the full record."""
        await cli.screen.refresh()
        await cli.handle_command("show 1")
        text = output(cli)
        assert "budi.santoso@example.com" in text
        assert "Jl. Merdeka No. 10" in text

    @pytest.mark.asyncio
    async def test_unknown_command(self, cli):
        """Test that unknown commands are reported."""
        assert await cli.handle_command("frobnicate") is True
        assert "Unknown command" in output(cli)


    @pytest.mark.asyncio
    async def test_row_pick_with_empty_list(self, cli):
        """Test that picking a row from an empty list says nothing is listed."""
        await cli.screen.refresh()
        await cli.handle_command("search nobody")
        await cli.handle_command("edit 1")
        text = output(cli)
        assert "No patients listed" in text
        assert "between 1 and 0" not in text
        assert cli.screen.show_form is False


class TestForm:
    """Tests for the interactive form."""

    @pytest.mark.asyncio
    async def test_add_patient(self, cli):
        """Test that filling the form adds a patient."""
        await cli.screen.refresh()
        values = {
            "name": "Rina Kusuma",
            "nik": "3301112223334445",
            "date_of_birth": "2001-04-21",
            "sex": "Perempuan",
            "phone": "081355566677",
            "blood_group": "A",
            "email": "",
            "address": "Jl. Diponegoro No. 2, Semarang",
        }
        with patch("patient_records.cli.Prompt.ask", side_effect=answers(values)):
            await cli.handle_command("add")

        assert "Rina Kusuma" in [p.name for p in cli.screen.patients]
        assert cli.screen.show_form is False

    @pytest.mark.asyncio
    async def test_edit_keeps_defaults(self, cli):
        """Test that editing only the phone keeps every other value."""
        await cli.screen.refresh()
        with patch("patient_records.cli.Prompt.ask", side_effect=answers({"phone": "0800"})):
            await cli.handle_command("edit 1")

        budi = next(p for p in cli.screen.patients if p.id == 1)
        assert budi.phone == "0800"
        assert budi.email == "budi.santoso@example.com"

    @pytest.mark.asyncio
    async def test_invalid_form_abandoned(self, cli):
        """Test that validation errors are shown and the form can be abandoned."""
        await cli.screen.refresh()
        with (
            patch("patient_records.cli.Prompt.ask", side_effect=answers({"name": "Ana", "nik": "12AB"})),
            patch("patient_records.cli.Confirm.ask", return_value=False),
        ):
            await cli.handle_command("add")

        assert "NIK may only contain digits" in output(cli)
        assert cli.screen.show_form is False
        assert len(cli.screen.patients) == 3

    @pytest.mark.asyncio
    async def test_failed_save_banner_shown_once(self, cli):
        """Test that a rejected save is reported in the form and not again on the next render."""
        await cli.screen.refresh()
        values = {
            "name": "Budi Kembar",
            "nik": "3171234567890001",
            "date_of_birth": "1985-03-12",
            "sex": "Laki-laki",
            "phone": "081234567891",
            "blood_group": "O",
            "address": "Jl. Merdeka No. 11",
        }
        with (
            patch("patient_records.cli.Prompt.ask", side_effect=answers(values)),
            patch("patient_records.cli.Confirm.ask", return_value=False),
        ):
            await cli.handle_command("add")

        cli.render()
        assert output(cli).count("NIK already exists") == 1
