from typing import Any

from fastapi.testclient import TestClient
from pytest_bdd import when
from pytest_bdd.model import Step

from tests.seat_inventory.fixtures import USERS
from tests.shared.utils import extract_table_data, labels_to_ids, login_as, parse_labels


@when('a user reserves seats:')
def user_reserves_seats(step: Step, client: TestClient, booking_state: dict[str, Any]):
    data = extract_table_data(step)
    login_as(client, USERS[data['user']])
    schedule_id = booking_state['schedule']['id']
    response = client.post(
        f'/api/seat-reservation/schedule/{schedule_id}',
        json={
            'seat_ids': labels_to_ids(booking_state['seats'], parse_labels(data['seats'])),
            'session_id': data['session_id'],
        },
    )
    booking_state['response'] = response


@when('a user commits a booking:')
def user_commits_booking(step: Step, client: TestClient, booking_state: dict[str, Any]):
    data = extract_table_data(step)
    login_as(client, USERS[data['user']])
    response = client.post(
        '/api/booking',
        json={
            'show_schedule_id': booking_state['schedule']['id'],
            'seat_ids': labels_to_ids(booking_state['seats'], parse_labels(data['seats'])),
            'session_id': data['session_id'],
        },
    )
    booking_state['response'] = response
    if response.status_code == 201:
        booking_state['booking'] = response.json()
        booking_state['owner'] = USERS[data['user']]


@when('the booking owner cancels the booking')
def owner_cancels_booking(client: TestClient, booking_state: dict[str, Any]):
    login_as(client, booking_state['owner'])
    booking_state['response'] = client.post(
        f'/api/booking/{booking_state["booking"]["id"]}/cancel'
    )
