from typing import Any

from fastapi.testclient import TestClient
from pytest_bdd import then
from pytest_bdd.model import Step

from tests.shared.utils import (
    assert_response_status,
    extract_single_value,
    extract_table_data,
    extract_table_rows,
    labels_to_ids,
    parse_labels,
)


@then('the response status code should be:')
def verify_status_code(step: Step, booking_state: dict[str, Any]):
    assert_response_status(booking_state['response'], int(extract_single_value(step)))


@then('the conflicting seats should be:')
def verify_conflicting_seats(step: Step, booking_state: dict[str, Any]):
    expected = [row['seat_labels'] for row in extract_table_rows(step)]
    body = booking_state['response'].json()
    assert body['seat_labels'] == expected
    assert body['seat_ids'] == labels_to_ids(booking_state['seats'], expected)


@then('the seats should be available:')
def verify_seats_available(step: Step, client: TestClient, booking_state: dict[str, Any]):
    schedule_id = booking_state['schedule']['id']
    for label in parse_labels(extract_table_data(step)['seats']):
        seat_id = booking_state['seats'][label]
        response = client.get(f'/api/seat/{seat_id}/schedule/{schedule_id}/availability')
        assert_response_status(response, 200)
        assert response.json()['available'] is True, f'{label} is not available'


@then('the seat counts should be:')
def verify_seat_counts(step: Step, client: TestClient, booking_state: dict[str, Any]):
    expected = extract_table_data(step)
    response = client.get(f'/api/seat/schedule/{booking_state["schedule"]["id"]}/seat-map')
    assert_response_status(response, 200)
    metadata = response.json()['metadata']
    assert metadata['total_seats'] == int(expected['total_seats'])
    assert metadata['seats_available'] == int(expected['seats_available'])
