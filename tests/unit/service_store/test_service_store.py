"""Unit tests for ServiceStore."""

import pytest

from issuebridge.service_store import (
    ServiceExistsError,
    ServiceNotFoundError,
    ServiceRecord,
    ServiceStore,
    merge_properties,
)


@pytest.fixture
def store():
    """Create an in-memory ServiceStore."""
    s = ServiceStore(":memory:")
    yield s
    s.close()


@pytest.mark.unit
class TestCreateService:
    """Tests for create_service."""

    def test_create_service(self, store: ServiceStore) -> None:
        record = store.create_service(
            7, "JiraService", title="JIRA", active=True, properties={"username": "bot"}
        )

        assert isinstance(record, ServiceRecord)
        assert record.id is not None
        assert record.type == "JiraService"
        assert record.project_id == 7
        assert record.active is True
        assert record.template is False
        assert record.properties_dict == {"username": "bot"}
        assert record.created_at is not None

    def test_defaults(self, store: ServiceStore) -> None:
        record = store.create_service(7, "JiraService")

        assert record.active is False
        assert record.title is None
        assert record.properties_dict == {}

    def test_one_service_per_type_per_project(self, store: ServiceStore) -> None:
        store.create_service(7, "JiraService")

        with pytest.raises(ServiceExistsError):
            store.create_service(7, "JiraService")

    def test_same_type_on_other_project(self, store: ServiceStore) -> None:
        store.create_service(7, "JiraService")
        record = store.create_service(8, "JiraService")

        assert record.project_id == 8


@pytest.mark.unit
class TestGetService:
    """Tests for service lookups."""

    def test_get_service(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService", properties={"api_version": "2"})

        record = store.get_service(created.id)

        assert record.id == created.id
        assert record.properties_dict == {"api_version": "2"}

    def test_get_service_not_found(self, store: ServiceStore) -> None:
        with pytest.raises(ServiceNotFoundError):
            store.get_service(999)

    def test_get_project_service(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService")

        assert store.get_project_service(7, "JiraService").id == created.id

    def test_get_project_service_not_found(self, store: ServiceStore) -> None:
        store.create_service(7, "JiraService")

        with pytest.raises(ServiceNotFoundError):
            store.get_project_service(8, "JiraService")

    def test_template_is_not_a_project_service(self, store: ServiceStore) -> None:
        store.create_template("JiraService")

        assert store.list_services() == []


@pytest.mark.unit
class TestListServices:
    """Tests for list_services."""

    def test_list_all(self, store: ServiceStore) -> None:
        store.create_service(8, "JiraService")
        store.create_service(7, "JiraService")

        assert [r.project_id for r in store.list_services()] == [7, 8]

    def test_list_for_project(self, store: ServiceStore) -> None:
        store.create_service(7, "JiraService")
        store.create_service(8, "JiraService")

        records = store.list_services(project_id=8)

        assert len(records) == 1
        assert records[0].project_id == 8


@pytest.mark.unit
class TestUpdateService:
    """Tests for update_service."""

    def test_merges_properties(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService", properties={"username": "a", "password": "p"})

        updated = store.update_service(created.id, properties={"username": "b", "api_version": "2"})

        assert updated.properties_dict == {"username": "b", "password": "p", "api_version": "2"}

    def test_none_removes_property(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService", properties={"username": "a", "password": "p"})

        updated = store.update_service(created.id, properties={"password": None})

        assert updated.properties_dict == {"username": "a"}

    def test_partial_update_keeps_other_fields(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService", title="JIRA", properties={"username": "a"})

        updated = store.update_service(created.id, active=True)

        assert updated.active is True
        assert updated.title == "JIRA"
        assert updated.properties_dict == {"username": "a"}

    def test_update_persists(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService")
        store.update_service(created.id, title="Company JIRA")

        assert store.get_service(created.id).title == "Company JIRA"

    def test_update_not_found(self, store: ServiceStore) -> None:
        with pytest.raises(ServiceNotFoundError):
            store.update_service(999, active=True)


@pytest.mark.unit
class TestDeleteService:
    """Tests for delete_service."""

    def test_delete_service(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService")

        store.delete_service(created.id)

        with pytest.raises(ServiceNotFoundError):
            store.get_service(created.id)

    def test_delete_not_found(self, store: ServiceStore) -> None:
        with pytest.raises(ServiceNotFoundError):
            store.delete_service(999)

    def test_service_can_be_recreated_after_delete(self, store: ServiceStore) -> None:
        created = store.create_service(7, "JiraService")
        store.delete_service(created.id)

        assert store.create_service(7, "JiraService").project_id == 7


@pytest.mark.unit
class TestTemplates:
    """Tests for template operations."""

    def test_create_template(self, store: ServiceStore) -> None:
        template = store.create_template("JiraService", properties={"api_version": "2"})

        assert template.template is True
        assert template.project_id is None
        assert store.get_template("JiraService").id == template.id

    def test_one_template_per_type(self, store: ServiceStore) -> None:
        store.create_template("JiraService")

        with pytest.raises(ServiceExistsError):
            store.create_template("JiraService")

    def test_get_template_not_found(self, store: ServiceStore) -> None:
        with pytest.raises(ServiceNotFoundError):
            store.get_template("JiraService")

    def test_build_from_template_copies_configuration(self, store: ServiceStore) -> None:
        store.create_template(
            "JiraService",
            title="Company JIRA",
            active=True,
            properties={"project_url": "https://jira.example.com", "api_version": "2"},
        )

        record = store.build_from_template(7, "JiraService")

        assert record.project_id == 7
        assert record.template is False
        assert record.title == "Company JIRA"
        assert record.active is True
        assert record.properties_dict == {"project_url": "https://jira.example.com", "api_version": "2"}

    def test_build_from_template_without_template(self, store: ServiceStore) -> None:
        with pytest.raises(ServiceNotFoundError):
            store.build_from_template(7, "JiraService")


@pytest.mark.unit
class TestMergeProperties:
    """Tests for merge_properties."""

    def test_does_not_mutate_input(self) -> None:
        current = {"a": "1"}

        merged = merge_properties(current, {"b": "2", "a": None})

        assert merged == {"b": "2"}
        assert current == {"a": "1"}
