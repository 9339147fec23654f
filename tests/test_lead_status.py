"""Tests for CRM lead status settings."""

import pytest

from ledgerdesk.cli.main import cli
from ledgerdesk.domain.errors import NotFoundError, ValidationError


class TestLeadStatusService:
    """Tests for LeadStatusService."""

    def test_add_and_list_in_order(self, lead_status_service):
        lead_status_service.add_lead_status("Won", order=3)
        lead_status_service.add_lead_status("New", order=1, is_default=True)
        lead_status_service.add_lead_status("Qualified", order=2, description="Budget confirmed")

        statuses = lead_status_service.list_lead_statuses()

        assert [s.lead_status for s in statuses] == ["New", "Qualified", "Won"]
        assert statuses[0].is_default is True
        assert statuses[0].is_active is True
        assert statuses[1].description == "Budget confirmed"

    def test_name_is_required(self, lead_status_service):
        with pytest.raises(ValidationError):
            lead_status_service.add_lead_status("   ")

    def test_order_must_be_positive(self, lead_status_service):
        with pytest.raises(ValidationError, match="Order"):
            lead_status_service.add_lead_status("New", order=0)

    def test_search(self, lead_status_service):
        lead_status_service.add_lead_status("New")
        lead_status_service.add_lead_status("Qualified", description="Budget confirmed")

        assert [s.lead_status for s in lead_status_service.search_lead_statuses("BUDGET")] == [
            "Qualified"
        ]
        assert len(lead_status_service.search_lead_statuses("")) == 2

    def test_update(self, lead_status_service):
        status_id = lead_status_service.add_lead_status("New")

        lead_status_service.update_lead_status(
            status_id, {"lead_status": " Fresh ", "is_active": False, "order": 4}
        )

        updated = lead_status_service.get_lead_status(status_id)
        assert updated.lead_status == "Fresh"
        assert updated.is_active is False
        assert updated.order == 4
        assert updated.updated_at is not None

    def test_update_rejects_unknown_field(self, lead_status_service):
        status_id = lead_status_service.add_lead_status("New")
        with pytest.raises(ValidationError, match="created_at"):
            lead_status_service.update_lead_status(status_id, {"created_at": None})

    def test_update_missing(self, lead_status_service):
        with pytest.raises(NotFoundError):
            lead_status_service.update_lead_status("missing", {"order": 2})

    def test_delete(self, lead_status_service):
        status_id = lead_status_service.add_lead_status("New")

        lead_status_service.delete_lead_status(status_id)

        assert lead_status_service.get_lead_status(status_id) is None
        with pytest.raises(NotFoundError):
            lead_status_service.delete_lead_status(status_id)


def test_lead_status_cli_workflow(cli_runner, cli_args):
    """Test add, list, update and delete through the CLI."""
    result = cli_runner.invoke(cli, cli_args + ["lead-status", "add", "New", "--default"])
    assert result.exit_code == 0
    assert "Added lead status 'New'" in result.output
    status_id = result.output.split("ID:")[1].strip().rstrip(")")

    result = cli_runner.invoke(cli, cli_args + ["lead-status", "update", status_id, "--order", "2"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, cli_args + ["lead-status", "list"])
    assert result.exit_code == 0
    assert "New" in result.output
    assert status_id in result.output

    result = cli_runner.invoke(cli, cli_args + ["lead-status", "delete", status_id], input="n\n")
    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output

    result = cli_runner.invoke(cli, cli_args + ["lead-status", "delete", status_id, "--yes"])
    assert result.exit_code == 0
    assert "Deleted lead status 'New'" in result.output

    result = cli_runner.invoke(cli, cli_args + ["lead-status", "list"])
    assert "No lead statuses found." in result.output


def test_lead_status_cli_update_nothing(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["lead-status", "update", "abc"])
    assert result.exit_code == 1
    assert "Nothing to update" in result.output
