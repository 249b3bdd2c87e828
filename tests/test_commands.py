"""
Tests for the command layer.

Commands never raise for domain failures; they return a CommandResult
and leave an audit trail.
"""

import logging

import pytest

from housing_office.audit import AuditLogger
from housing_office.config import Settings
from housing_office.models import AuditEventType, CommandStatus, Service
from housing_office.orchestrator import OfficeCommands, create_office_components
from housing_office.registry import HousingOffice
from housing_office.storage import InMemoryAuditStorage


@pytest.fixture
def storage():
    return InMemoryAuditStorage()


@pytest.fixture
def commands(storage):
    return OfficeCommands(HousingOffice(), audit_logger=AuditLogger(storage))


def _event_types(storage):
    return [e.event_type for e in reversed(storage.get_recent_events(limit=1000))]


class TestAddResident:

    def test_returns_sequential_ids(self, commands):
        first = commands.add_resident("Smirnov A.", "Lenina 5")
        second = commands.add_resident("Petrov B.", "Mira 1")
        assert first.success and second.success
        assert (first.resident_id, second.resident_id) == (1, 2)
        assert "ID: 1" in first.message

    def test_audited(self, commands, storage):
        commands.add_resident("Smirnov A.", "Lenina 5")
        [event] = storage.get_events_by_entity("resident", 1)
        assert event.event_type == AuditEventType.RESIDENT_ADDED
        assert event.details["address"] == "Lenina 5"


class TestSetTariff:

    def test_ok(self, commands):
        result = commands.set_tariff(Service.ELECTRICITY, 5.0)
        assert result.status == CommandStatus.OK
        assert result.value == 5.0
        assert "RUB/kWh" in result.message
        assert commands.office.tariffs[Service.ELECTRICITY] == 5.0

    def test_negative_rate_rejected(self, commands, storage):
        result = commands.set_tariff(Service.GAS, -2.0)
        assert result.status == CommandStatus.INVALID_ARGUMENT
        assert commands.office.tariffs[Service.GAS] == 0.0
        assert _event_types(storage) == [AuditEventType.INVALID_ARGUMENT]

    def test_unknown_service_rejected(self, commands, storage):
        result = commands.set_tariff("steam", 1.0)
        assert result.status == CommandStatus.INVALID_ARGUMENT
        assert set(commands.office.tariffs) == set(Service)
        [event] = storage.get_recent_events()
        assert event.details["field"] == "service"

    def test_service_value_accepted(self, commands):
        result = commands.set_tariff("water", 30.0)
        assert result.success
        assert "RUB/m³" in result.message
        assert commands.office.tariffs[Service.WATER] == 30.0

    def test_rate_too_large_for_float_rejected(self, commands):
        result = commands.set_tariff(Service.GAS, 10**400)
        assert result.status == CommandStatus.INVALID_ARGUMENT
        assert commands.office.tariffs[Service.GAS] == 0.0

    def test_previous_rate_audited(self, commands, storage):
        commands.set_tariff(Service.WATER, 10.0)
        commands.set_tariff(Service.WATER, 12.0)
        events = storage.get_events_by_entity("tariff")
        assert [e.details["previous_rate"] for e in events] == [0.0, 10.0]


class TestAddConsumption:

    def test_ok(self, commands):
        commands.add_resident("Smirnov A.", "Lenina 5")
        commands.set_tariff(Service.ELECTRICITY, 5.0)
        result = commands.add_consumption(1, Service.ELECTRICITY, 10)
        assert result.success
        assert result.value == 50.0
        assert commands.get_stats().cumulative_revenue == 50.0

    def test_unknown_resident(self, commands, storage):
        commands.add_resident("Smirnov A.", "Lenina 5")
        commands.set_tariff(Service.ELECTRICITY, 5.0)
        before = commands.get_stats()

        result = commands.add_consumption(42, Service.ELECTRICITY, 10)

        assert result.status == CommandStatus.RESIDENT_NOT_FOUND
        assert result.resident_id == 42
        assert "42" in result.message
        assert commands.get_stats() == before
        assert commands.office.get_resident(1).consumption == ()
        assert _event_types(storage)[-1] == AuditEventType.RESIDENT_NOT_FOUND

    def test_negative_amount(self, commands):
        commands.add_resident("Smirnov A.", "Lenina 5")
        result = commands.add_consumption(1, Service.WATER, -1)
        assert result.status == CommandStatus.INVALID_ARGUMENT
        assert commands.office.get_resident(1).consumption == ()

    def test_unknown_service(self, commands, storage):
        commands.add_resident("Smirnov A.", "Lenina 5")
        result = commands.add_consumption(1, "steam", 1)
        assert result.status == CommandStatus.INVALID_ARGUMENT
        assert commands.office.get_resident(1).consumption == ()
        assert _event_types(storage)[-1] == AuditEventType.INVALID_ARGUMENT

    def test_service_value_accepted(self, commands, storage):
        commands.add_resident("Smirnov A.", "Lenina 5")
        commands.set_tariff(Service.GAS, 2.0)
        result = commands.add_consumption(1, "gas", 3)
        assert result.success
        assert result.value == 6.0
        assert commands.office.get_resident(1).consumption[0].service is Service.GAS
        assert _event_types(storage)[-1] == AuditEventType.CONSUMPTION_RECORDED

    def test_amount_too_large_for_float(self, commands):
        commands.add_resident("Smirnov A.", "Lenina 5")
        commands.set_tariff(Service.GAS, 2.0)
        result = commands.add_consumption(1, Service.GAS, 10**400)
        assert result.status == CommandStatus.INVALID_ARGUMENT
        assert commands.get_stats().cumulative_revenue == 0.0
        assert commands.office.get_resident(1).consumption == ()


class TestNameSearch:

    def test_empty_registry_not_found(self, commands):
        result = commands.total_cost_for_name_containing("X")
        assert result.status == CommandStatus.NOT_FOUND
        assert result.value is None

    def test_zero_cost_match_is_ok(self, commands):
        commands.add_resident("Ivanov I.", "A")
        result = commands.total_cost_for_name_containing("Ivanov")
        assert result.status == CommandStatus.OK
        assert result.value == 0.0
        assert result.resident_id == 1

    def test_first_of_two_matches(self, commands):
        commands.add_resident("Ivanov I.", "A")
        commands.add_resident("Ivanova O.", "B")
        commands.set_tariff(Service.GAS, 2.0)
        commands.add_consumption(2, Service.GAS, 5)

        result = commands.total_cost_for_name_containing("Ivanov")

        assert result.resident_id == 1
        assert result.value == 0.0


class TestResidentDetail:

    def test_ok(self, commands):
        commands.add_resident("Smirnov A.", "Lenina 5")
        commands.set_tariff(Service.ELECTRICITY, 5.0)
        commands.add_consumption(1, Service.ELECTRICITY, 10)
        commands.set_tariff(Service.ELECTRICITY, 7.0)

        result = commands.get_resident_detail(1)

        assert result.success
        assert result.report.total_cost == 70.0
        assert result.report.lines[0].rate == 7.0
        assert commands.get_stats().cumulative_revenue == 50.0

    def test_unknown(self, commands):
        result = commands.get_resident_detail(3)
        assert result.status == CommandStatus.RESIDENT_NOT_FOUND
        assert result.report is None


class TestListAndStats:

    def test_empty(self, commands):
        assert commands.list_residents() == []
        assert commands.get_stats().resident_count == 0

    def test_queries_not_audited(self, commands, storage):
        commands.get_stats()
        commands.list_residents()
        assert len(storage) == 0

    def test_without_audit_logger(self):
        commands = OfficeCommands(HousingOffice())
        assert commands.add_resident("A", "B").success
        assert commands.add_consumption(5, Service.GAS, 1).status == (
            CommandStatus.RESIDENT_NOT_FOUND
        )


class TestCreateOfficeComponents:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CURRENCY_UNIT", raising=False)
        monkeypatch.delenv("AUDIT_ENABLED", raising=False)
        office, commands, audit_logger = create_office_components(Settings())
        assert commands.office is office
        assert office.currency_unit == "RUB"
        assert audit_logger is not None

        commands.add_resident("A", "B")
        assert len(audit_logger.storage) == 1

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CURRENCY_UNIT", "EUR")
        monkeypatch.setenv("AUDIT_ENABLED", "false")
        office, commands, audit_logger = create_office_components(Settings())
        assert office.currency_unit == "EUR"
        assert audit_logger is None
        assert commands.get_stats().currency_unit == "EUR"

    def test_debug_mode_overrides_log_level(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)
        monkeypatch.setenv("DEBUG_MODE", "true")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        create_office_components(Settings())
        assert root.level == logging.DEBUG

    def test_log_level_applied_without_debug_mode(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)
        monkeypatch.setenv("DEBUG_MODE", "false")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        create_office_components(Settings())
        assert root.level == logging.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
