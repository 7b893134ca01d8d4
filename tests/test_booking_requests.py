"""Tests for turning raw booking payloads into SlotBooking / TravelBooking."""

from datetime import date

import pytest

from travelhub.models.reservation import SlotBooking, TravelBooking
from travelhub.services.booking_requests import parse_reservation_request
from travelhub.services.errors import BookingValidationError, MissingFieldError


class TestLegacyPayloads:
    def test_travel_inferred_from_traveler_count(self):
        request = parse_reservation_request({
            "agencyId": "a1",
            "packageId": "p1",
            "departureDate": "2026-12-01",
            "numberOfTravelers": 2,
            "travelers": [{"name": "Ann", "age": 30}, {"name": "Bob", "passportNumber": "X1"}],
            "promoCode": "save20",
            "customerNotes": "window seats",
        })
        assert isinstance(request, TravelBooking)
        assert request.date == date(2026, 12, 1)
        assert request.number_of_travelers == 2
        assert request.travelers[1].passport_number == "X1"
        assert request.promo_code == "save20"
        assert request.notes == "window seats"

    def test_travel_inferred_from_departure_date_alone(self):
        request = parse_reservation_request({
            "agencyId": "a1", "packageId": "p1", "departureDate": "2026-12-01",
        })
        assert isinstance(request, TravelBooking)
        assert request.number_of_travelers == 1

    def test_travelers_truncated_to_count(self):
        request = parse_reservation_request({
            "agencyId": "a1", "packageId": "p1", "departureDate": "2026-12-01",
            "numberOfTravelers": 1,
            "travelers": [{"name": "Ann"}, {"name": "Bob"}],
        })
        assert [t.name for t in request.travelers] == ["Ann"]

    def test_slot_uses_business_and_service_names(self):
        request = parse_reservation_request({
            "businessId": "a1",
            "serviceId": "s1",
            "appointmentDate": "2026-11-02T00:00:00.000Z",
            "startTime": "9:30",
            "notes": "first visit",
        })
        assert isinstance(request, SlotBooking)
        assert request.agency_id == "a1"
        assert request.package_id == "s1"
        assert request.date == date(2026, 11, 2)
        assert request.start_time == "09:30"

    def test_client_prices_are_ignored(self):
        request = parse_reservation_request({
            "agencyId": "a1", "packageId": "p1", "departureDate": "2026-12-01",
            "subtotal": 1, "discount": 999, "totalAmount": 0,
        })
        assert not hasattr(request, "total_amount")


class TestExplicitKind:
    def test_tagged_travel_payload(self):
        request = parse_reservation_request({
            "kind": "travel", "agency_id": "a1", "package_id": "p1", "date": "2026-12-01",
            "number_of_travelers": 3,
        })
        assert isinstance(request, TravelBooking)
        assert request.number_of_travelers == 3

    def test_tagged_slot_payload_requires_start_time(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_reservation_request({
                "kind": "slot", "agency_id": "a1", "package_id": "p1", "date": "2026-12-01",
            })
        assert exc_info.value.fields == ["start_time"]

    def test_tagged_slot_start_time_is_zero_padded(self):
        request = parse_reservation_request({
            "kind": "slot", "agency_id": "a1", "package_id": "p1", "date": "2026-12-01", "start_time": "9:05",
        })
        assert request.start_time == "09:05"

    def test_tagged_travelers_truncated_to_count(self):
        request = parse_reservation_request({
            "kind": "travel", "agency_id": "a1", "package_id": "p1", "date": "2026-12-01",
            "number_of_travelers": 1,
            "travelers": [{"name": "Ann"}, {"name": "Bob"}, {"name": "Cy"}],
        })
        assert request.number_of_travelers == 1
        assert [t.name for t in request.travelers] == ["Ann"]

    def test_tagged_travel_gets_legacy_defaults(self):
        request = parse_reservation_request({
            "kind": "travel", "agency_id": "a1", "package_id": "p1", "date": "2026-12-01",
            "number_of_travelers": "0",
            "travelers": [{"name": "Ann", "passportNumber": "P-1"}, {"name": "Bob"}],
        })
        assert request.number_of_travelers == 1
        assert [(t.name, t.passport_number) for t in request.travelers] == [("Ann", "P-1")]

    def test_tagged_missing_package(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_reservation_request({"kind": "travel", "agency_id": "a1", "date": "2026-11-02"})
        assert exc_info.value.fields == ["package_id"]

    def test_tagged_missing_everything(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_reservation_request({"kind": "slot", "start_time": "10:00"})
        assert exc_info.value.fields == ["agency_id", "package_id", "date"]

    def test_tagged_bad_value_keeps_plain_field_name(self):
        with pytest.raises(BookingValidationError) as exc_info:
            parse_reservation_request({
                "kind": "travel", "agency_id": "a1", "package_id": "p1", "date": "someday",
            })
        assert exc_info.value.fields == ["date"]

    def test_direct_model_truncates_travelers(self):
        request = TravelBooking(
            agency_id="a1", package_id="p1", date=date(2026, 12, 1),
            number_of_travelers=2, travelers=[{"name": "Ann"}, {"name": "Bob"}, {"name": "Cy"}],
        )
        assert [t.name for t in request.travelers] == ["Ann", "Bob"]


class TestRejections:
    def test_missing_package_and_service(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_reservation_request({"agencyId": "a1", "appointmentDate": "2026-11-02", "startTime": "10:00"})
        assert exc_info.value.fields == ["package_id"]

    def test_missing_everything(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_reservation_request({})
        assert exc_info.value.fields == ["agency_id", "package_id", "date"]

    def test_neither_slot_nor_travel_fields(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_reservation_request({"agencyId": "a1", "packageId": "p1", "appointmentDate": "2026-11-02"})
        assert exc_info.value.fields == ["start_time"]

    def test_malformed_date(self):
        with pytest.raises(BookingValidationError):
            parse_reservation_request({"agencyId": "a1", "packageId": "p1", "departureDate": "next friday"})

    def test_non_numeric_traveler_count(self):
        with pytest.raises(BookingValidationError):
            parse_reservation_request({
                "agencyId": "a1", "packageId": "p1", "departureDate": "2026-12-01", "numberOfTravelers": "two",
            })

    def test_negative_traveler_count(self):
        with pytest.raises(BookingValidationError):
            parse_reservation_request({
                "agencyId": "a1", "packageId": "p1", "departureDate": "2026-12-01", "numberOfTravelers": -2,
            })

    @pytest.mark.parametrize("travelers", [["Alice"], [42], "Alice", {"name": "Alice"}])
    def test_travelers_must_be_a_list_of_objects(self, travelers):
        with pytest.raises(BookingValidationError):
            parse_reservation_request({
                "agencyId": "a1", "packageId": "p1", "departureDate": "2026-12-01", "travelers": travelers,
            })

    def test_traveler_without_name(self):
        with pytest.raises(BookingValidationError) as exc_info:
            parse_reservation_request({
                "agencyId": "a1", "packageId": "p1", "departureDate": "2026-12-01",
                "numberOfTravelers": 2, "travelers": [{"name": "Ann"}, {"age": 4}],
            })
        assert exc_info.value.fields == ["travelers.1"]

    def test_malformed_start_time(self):
        with pytest.raises(BookingValidationError):
            parse_reservation_request({
                "agencyId": "a1", "packageId": "p1", "appointmentDate": "2026-11-02", "startTime": "noon",
            })
