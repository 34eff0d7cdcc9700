"""Registration form validation tests."""

from decimal import Decimal

import pytest

from tattsync.services.requirements_service import PaymentSettingsView, RequirementsView
from tattsync.validation import ValidationError, validate_registration_data


NO_PAYMENT = RequirementsView()
PAID = RequirementsView(
    requires_payment=True,
    payment_amount=Decimal("150.00"),
    payment_settings=PaymentSettingsView(cash_enabled=True, stripe_enabled=True),
    payment_settings_loaded=True,
)
PAID_WITHOUT_SETTINGS = RequirementsView(requires_payment=True, payment_amount=Decimal("150.00"))
PAID_WITH_INSTALLMENTS = RequirementsView(
    requires_payment=True,
    payment_amount=Decimal("150.00"),
    payment_settings=PaymentSettingsView(stripe_enabled=True, allow_installments=True),
    payment_settings_loaded=True,
)


def _fields(exc_info) -> dict:
    return exc_info.value.fields


class TestValidateRegistrationData:

    def test_minimal_artist_form(self):
        cleaned = validate_registration_data({"agreement_accepted": True}, "artist", NO_PAYMENT)
        assert cleaned["agreement_accepted"] is True
        assert cleaned["payment_method"] is None

    def test_text_fields_are_stripped(self):
        cleaned = validate_registration_data(
            {"agreement_accepted": True, "emergency_contact_name": "  Tom  "}, "artist", NO_PAYMENT
        )
        assert cleaned["emergency_contact_name"] == "Tom"

    def test_unknown_keys_are_kept(self):
        cleaned = validate_registration_data(
            {"agreement_accepted": True, "instagram": "@inkbysarah"}, "artist", NO_PAYMENT
        )
        assert cleaned["instagram"] == "@inkbysarah"

    @pytest.mark.parametrize("payload", [None, [], "agree", 1])
    def test_payload_must_be_object(self, payload):
        with pytest.raises(ValidationError):
            validate_registration_data(payload, "artist", NO_PAYMENT)

    @pytest.mark.parametrize("application_type", ["artist", "piercer", "trader", "caterer"])
    def test_agreement_required_for_bound_types(self, application_type):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration_data({}, application_type, NO_PAYMENT)
        assert "agreement_accepted" in _fields(exc_info)

    @pytest.mark.parametrize("application_type", ["volunteer", "performer"])
    def test_agreement_optional_for_other_types(self, application_type):
        cleaned = validate_registration_data({}, application_type, NO_PAYMENT)
        assert cleaned["agreement_accepted"] is False

    def test_agreement_must_be_boolean(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration_data({"agreement_accepted": "yes"}, "volunteer", NO_PAYMENT)
        assert "agreement_accepted" in _fields(exc_info)

    def test_text_field_type_and_length(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration_data(
                {"agreement_accepted": True, "allergies": ["latex"], "emergency_contact_phone": "0" * 65},
                "artist",
                NO_PAYMENT,
            )
        assert set(_fields(exc_info)) == {"allergies", "emergency_contact_phone"}

    def test_payment_method_required_when_paid(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration_data({"agreement_accepted": True}, "artist", PAID)
        assert _fields(exc_info)["payment_method"] == "Please select a payment method"

    def test_unknown_payment_method(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration_data({"agreement_accepted": True, "payment_method": "cheque"}, "artist", NO_PAYMENT)
        assert "payment_method" in _fields(exc_info)

    def test_payment_method_must_be_enabled(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_registration_data({"agreement_accepted": True, "payment_method": "bank_transfer"}, "artist", PAID)
        assert "not available" in _fields(exc_info)["payment_method"]

    def test_installments_need_allow_installments(self):
        with pytest.raises(ValidationError):
            validate_registration_data(
                {"agreement_accepted": True, "payment_method": "stripe_3_installments"}, "artist", PAID
            )
        cleaned = validate_registration_data(
            {"agreement_accepted": True, "payment_method": "stripe_6_installments"}, "artist", PAID_WITH_INSTALLMENTS
        )
        assert cleaned["payment_method"] == "stripe_6_installments"

    def test_enabled_method_accepted(self):
        cleaned = validate_registration_data({"agreement_accepted": True, "payment_method": "cash"}, "artist", PAID)
        assert cleaned["payment_method"] == "cash"

    def test_any_known_method_when_settings_unavailable(self):
        cleaned = validate_registration_data(
            {"agreement_accepted": True, "payment_method": "stripe_6_installments"}, "artist", PAID_WITHOUT_SETTINGS
        )
        assert cleaned["payment_method"] == "stripe_6_installments"

        with pytest.raises(ValidationError):
            validate_registration_data({"agreement_accepted": True}, "artist", PAID_WITHOUT_SETTINGS)
