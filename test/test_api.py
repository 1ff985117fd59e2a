import uuid
from datetime import datetime, timezone

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from hr_admin.api.employees import get_employee_service
from hr_admin.core.exceptions import EmployeeIdGenerationError, EmployeeNotFoundError
from hr_admin.main import app
from hr_admin.models.model import Education, Employee
from hr_admin.schemas.schema import EmployeeCreate, EmployeeUpdate


def make_employee(**fields):
    employee_id = fields.pop("id", uuid.uuid4())
    education = [
        Education(id=uuid.uuid4(), employee_id=employee_id, **row)
        for row in fields.pop("education", [])
    ]
    values = {
        "emp_id": "LK001",
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "a@x.com",
        "password": None,
        "changed_temp_password": False,
        "created_at": datetime(2026, 1, 5, tzinfo=timezone.utc),
        "updated_at": datetime(2026, 1, 5, tzinfo=timezone.utc),
    }
    values.update(fields)
    return Employee(id=employee_id, education_details=education, **values)


# Fixtures
@pytest.fixture
def mock_service():
    service = MagicMock()
    service.get_all = AsyncMock()
    service.get_by_id = AsyncMock()
    service.create = AsyncMock()
    service.update = AsyncMock()
    service.delete = AsyncMock()
    return service


@pytest.fixture
def client(mock_service):
    """FastAPI test client with the employee service mocked out"""
    app.dependency_overrides[get_employee_service] = lambda: mock_service
    yield TestClient(app)
    app.dependency_overrides.clear()


# Tests
def test_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_employees(client, mock_service):
    mock_service.get_all.return_value = [
        make_employee(education=[{"institution": "X", "qualification": "BSc"}]),
        make_employee(emp_id="LK002", first_name="Ravi"),
    ]

    response = client.get("/api/employees")

    assert response.status_code == 200
    data = response.json()
    assert [e["empId"] for e in data] == ["LK001", "LK002"]
    assert data[0]["firstName"] == "Asha"
    assert data[0]["educationDetails"][0]["institution"] == "X"
    assert data[0]["educationDetails"][0]["qualification"] == "BSc"
    assert data[1]["educationDetails"] == []


def test_list_employees_failure(client, mock_service):
    mock_service.get_all.side_effect = RuntimeError("pool exhausted")

    response = client.get("/api/employees")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch employees"}


def test_create_employee(client, mock_service):
    mock_service.create.return_value = make_employee(temp_password_hash="$2b$04$hash")

    response = client.post("/api/employees", json={
        "firstName": "Asha",
        "lastName": "Rao",
        "email": "a@x.com",
        "education": [{"institution": "X", "qualification": "BSc"}],
        "generateTemp": True,
        "tempPassword": "Abc12345",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["empId"] == "LK001"
    assert data["password"] is None
    assert data["changedTempPassword"] is False
    assert "tempPassword" not in data
    assert "Abc12345" not in response.text

    payload = mock_service.create.await_args.args[0]
    assert isinstance(payload, EmployeeCreate)
    assert payload.first_name == "Asha"
    assert payload.temp_password.get_secret_value() == "Abc12345"
    assert payload.education[0].institution == "X"


def test_create_employee_generic_failure(client, mock_service):
    mock_service.create.side_effect = RuntimeError("connection lost")

    response = client.post("/api/employees", json={"firstName": "Asha"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create employee"}


def test_create_employee_configuration_failure(client, mock_service):
    mock_service.create.side_effect = EmployeeIdGenerationError(
        "Failed to get sequence value (employee_number_seq)"
    )

    response = client.post("/api/employees", json={"firstName": "Asha"})

    assert response.status_code == 500
    assert "employee_number_seq" in response.json()["error"]


def test_get_employee(client, mock_service):
    employee = make_employee()
    mock_service.get_by_id.return_value = employee

    response = client.get(f"/api/employees/{employee.id}")

    assert response.status_code == 200
    assert response.json()["id"] == str(employee.id)
    mock_service.get_by_id.assert_awaited_once_with(employee.id)


def test_get_nonexistent_employee(client, mock_service):
    mock_service.get_by_id.return_value = None

    response = client.get(f"/api/employees/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_get_employee_failure(client, mock_service):
    mock_service.get_by_id.side_effect = RuntimeError("boom")

    response = client.get(f"/api/employees/{uuid.uuid4()}")

    assert response.status_code == 500
    assert "error" in response.json()


def test_get_employee_rejects_malformed_id(client, mock_service):
    response = client.get("/api/employees/not-a-uuid")

    assert response.status_code == 422
    body = response.json()
    assert set(body) == {"error"}
    assert "employee_id" in body["error"]
    mock_service.get_by_id.assert_not_awaited()


def test_create_employee_rejects_badly_typed_body(client, mock_service):
    response = client.post("/api/employees", json={"firstName": 123, "tempPassword": "Abc12345"})

    assert response.status_code == 422
    body = response.json()
    assert set(body) == {"error"}
    assert "firstName" in body["error"]
    assert "Abc12345" not in response.text
    mock_service.create.assert_not_awaited()


def test_unknown_route_renders_error_body(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_wrong_method_renders_error_body(client):
    response = client.patch("/api/employees")

    assert response.status_code == 405
    assert set(response.json()) == {"error"}


def test_update_employee(client, mock_service):
    employee = make_employee(last_name="Raoo")
    mock_service.update.return_value = employee

    response = client.put(f"/api/employees/{employee.id}", json={"lastName": "Raoo"})

    assert response.status_code == 200
    assert response.json()["lastName"] == "Raoo"

    employee_id, payload = mock_service.update.await_args.args
    assert employee_id == employee.id
    assert isinstance(payload, EmployeeUpdate)
    assert payload.model_fields_set == {"last_name"}


def test_update_nonexistent_employee(client, mock_service):
    missing = uuid.uuid4()
    mock_service.update.side_effect = EmployeeNotFoundError(missing)

    response = client.put(f"/api/employees/{missing}", json={"lastName": "Raoo"})

    assert response.status_code == 500
    assert "not found" in response.json()["error"].lower()


def test_delete_employee(client, mock_service):
    employee_id = uuid.uuid4()

    response = client.delete(f"/api/employees/{employee_id}")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    mock_service.delete.assert_awaited_once_with(employee_id)


def test_delete_nonexistent_employee(client, mock_service):
    missing = uuid.uuid4()
    mock_service.delete.side_effect = EmployeeNotFoundError(missing)

    response = client.delete(f"/api/employees/{missing}")

    assert response.status_code == 500
    assert "not found" in response.json()["error"].lower()
