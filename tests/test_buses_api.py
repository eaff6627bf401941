from datetime import datetime, timedelta, timezone

from src.buses.schemas import BusType
from tests.conftest import bus_payload


class TestListBuses:
    def test_public_listing_sorted_by_departure(self, client, make_bus):
        later = make_bus(hours_ahead=50)
        sooner = make_bus(hours_ahead=30)

        body = client.get('/api/bus').json()

        assert body['success'] is True
        assert body['count'] == 2
        assert [b['id'] for b in body['data']] == [sooner.id, later.id]

    def test_filters_by_route_and_type(self, client, make_bus):
        kandy = make_bus(to_location='Kandy')
        make_bus(to_location='Galle')
        make_bus(to_location='Kandy', bus_type=BusType.NORMAL_COACHES)

        body = client.get('/api/bus', params={'from': 'Colombo', 'to': 'Kandy', 'type': 'Intercity'}).json()

        assert body['count'] == 1
        assert body['data'][0]['id'] == kandy.id

    def test_filters_by_departure_date(self, client, make_bus):
        tomorrow_bus = make_bus(hours_ahead=24)
        make_bus(hours_ahead=24 * 5)
        travel_date = tomorrow_bus.departure_time.date().isoformat()

        body = client.get('/api/bus', params={'date': travel_date}).json()

        assert [b['id'] for b in body['data']] == [tomorrow_bus.id]

    def test_unknown_bus_type_filter(self, client):
        response = client.get('/api/bus', params={'type': 'Rocket'})

        assert response.status_code == 400


class TestGetBus:
    def test_returns_bus_with_duration(self, client, make_bus):
        bus = make_bus()

        data = client.get(f'/api/bus/{bus.id}').json()['data']

        assert data['operator'] == {'name': 'NCG Express', 'contact': '+94 77 765 4321'}
        assert data['busType'] == 'Intercity'
        assert data['from'] == 'Colombo'
        assert data['to'] == 'Kandy'
        assert data['durationMinutes'] == 180
        assert data['price'] == 1000
        assert data['amenities'] == ['AC', 'WiFi']
        assert data['status'] == 'scheduled'

    def test_missing_bus(self, client):
        response = client.get('/api/bus/missing')

        assert response.status_code == 404
        assert response.json() == {'success': False, 'message': 'Bus not found'}


class TestCreateBus:
    def test_admin_creates_bus(self, client, admin_headers):
        response = client.post('/api/bus', json=bus_payload(), headers=admin_headers)

        assert response.status_code == 201
        data = response.json()['data']
        assert data['availableSeats'] == 49
        assert data['totalSeats'] == 49
        assert data['busType'] == 'Highway Bus'
        assert data['durationMinutes'] == 120

    def test_regular_user_cannot_create(self, client, user_headers):
        response = client.post('/api/bus', json=bus_payload(), headers=user_headers)

        assert response.status_code == 401

    def test_anonymous_cannot_create(self, client):
        response = client.post('/api/bus', json=bus_payload())

        assert response.status_code == 401

    def test_rejects_negative_price(self, client, admin_headers):
        response = client.post('/api/bus', json=bus_payload(price=-1), headers=admin_headers)

        assert response.status_code == 400
        assert response.json()['success'] is False

    def test_rejects_unknown_bus_type(self, client, admin_headers):
        response = client.post('/api/bus', json=bus_payload(busType='Rocket'), headers=admin_headers)

        assert response.status_code == 400

    def test_rejects_zero_seats(self, client, admin_headers):
        response = client.post('/api/bus', json=bus_payload(totalSeats=0), headers=admin_headers)

        assert response.status_code == 400

    def test_rejects_more_available_than_total(self, client, admin_headers):
        response = client.post(
            '/api/bus', json=bus_payload(totalSeats=10, availableSeats=11), headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()['message'] == 'Available seats cannot exceed total seats'

    def test_duplicate_amenities_are_collapsed(self, client, admin_headers):
        response = client.post(
            '/api/bus', json=bus_payload(amenities=['AC', 'AC', 'Snacks']), headers=admin_headers
        )

        assert response.json()['data']['amenities'] == ['AC', 'Snacks']


class TestUpdateAndDeleteBus:
    def test_partial_update(self, client, admin_headers, make_bus):
        bus = make_bus()
        departure = datetime.now(timezone.utc) + timedelta(days=3)

        response = client.put(
            f'/api/bus/{bus.id}',
            json={'status': 'delayed', 'departureTime': departure.isoformat(), 'operator': {'name': 'Sugath', 'contact': '0771234567'}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()['data']
        assert data['status'] == 'delayed'
        assert data['operator']['name'] == 'Sugath'
        assert data['to'] == 'Kandy'

    def test_update_cannot_exceed_total_seats(self, client, admin_headers, make_bus):
        bus = make_bus(total_seats=10, available_seats=5)

        response = client.put(f'/api/bus/{bus.id}', json={'availableSeats': 11}, headers=admin_headers)

        assert response.status_code == 400
        assert client.get(f'/api/bus/{bus.id}').json()['data']['availableSeats'] == 5

    def test_update_missing_bus(self, client, admin_headers):
        response = client.put('/api/bus/missing', json={'status': 'delayed'}, headers=admin_headers)

        assert response.status_code == 404

    def test_delete_bus(self, client, admin_headers, make_bus):
        bus = make_bus()

        response = client.delete(f'/api/bus/{bus.id}', headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {'success': True, 'data': {}}
        assert client.get(f'/api/bus/{bus.id}').status_code == 404

    def test_cannot_delete_bus_with_bookings(self, client, admin_headers, user_headers, make_bus):
        bus = make_bus()
        client.post(
            '/api/bookings',
            json={'busId': bus.id, 'seats': [1], 'paymentMethod': 'cash'},
            headers=user_headers,
        )

        response = client.delete(f'/api/bus/{bus.id}', headers=admin_headers)

        assert response.status_code == 400
        assert response.json()['message'] == 'Cannot delete a bus that has bookings'


class TestSeatsEndpoint:
    def test_reserve_and_release(self, client, user_headers, make_bus):
        bus = make_bus(total_seats=40)

        reserved = client.put(f'/api/bus/{bus.id}/seats', json={'seats': 4, 'isBooking': True}, headers=user_headers)
        released = client.put(f'/api/bus/{bus.id}/seats', json={'seats': 4, 'isBooking': False}, headers=user_headers)

        assert reserved.json()['data']['availableSeats'] == 36
        assert released.json()['data']['availableSeats'] == 40

    def test_over_reservation_is_rejected(self, client, user_headers, make_bus):
        bus = make_bus(total_seats=10, available_seats=3)

        response = client.put(f'/api/bus/{bus.id}/seats', json={'seats': 4, 'isBooking': True}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()['message'] == 'Not enough seats available'

    def test_requires_authentication(self, client, make_bus):
        bus = make_bus()

        response = client.put(f'/api/bus/{bus.id}/seats', json={'seats': 1, 'isBooking': True})

        assert response.status_code == 401
