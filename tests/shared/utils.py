from typing import Any, Dict, Iterable, List

from fastapi.testclient import TestClient

from src.service.seat_inventory.domain.entity.user_entity import UserEntity
from src.service.seat_inventory.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.seat_inventory.driving_adapter.http_controller.auth.role_auth import (
    AUTH_COOKIE_NAME,
)


def extract_table_data(step) -> Dict[str, Any]:
    rows = step.data_table.rows
    headers = [cell.value for cell in rows[0].cells]
    values = [cell.value for cell in rows[1].cells]
    return dict(zip(headers, values, strict=True))


def extract_table_rows(step) -> List[Dict[str, Any]]:
    rows = step.data_table.rows
    headers = [cell.value for cell in rows[0].cells]
    return [
        dict(zip(headers, [cell.value for cell in row.cells], strict=True)) for row in rows[1:]
    ]


def login_as(client: TestClient, user: UserEntity) -> None:
    """Put a freshly signed JWT for `user` into the client's auth cookie."""
    client.cookies.set(AUTH_COOKIE_NAME, JwtAuth().create_jwt_token(user))


def bearer_headers(user: UserEntity) -> Dict[str, str]:
    return {'Authorization': f'Bearer {JwtAuth().create_jwt_token(user)}'}


def assert_response_status(response, expected_status: int, message: str | None = None):
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response.text}'
    )


def seat_ids_by_label(client: TestClient, schedule_id: int) -> Dict[str, int]:
    response = client.get(f'/api/seat/schedule/{schedule_id}/seat-map')
    assert_response_status(response, 200)
    return {
        f'{row["row_label"]}{seat["seat_number"]}': seat['seat_id']
        for row in response.json()['rows']
        for seat in row['seats']
    }


def parse_labels(value: str) -> List[str]:
    return [label.strip() for label in value.split(',') if label.strip()]


def labels_to_ids(mapping: Dict[str, int], labels: Iterable[str]) -> List[int]:
    return [mapping[label] for label in labels]


def extract_single_value(step) -> str:
    return step.data_table.rows[0].cells[0].value
