"""Tests for the registration form schemas."""
from conftest import valid_fields

from tourney.services.validation import DuoEntry, SoloEntry, SquadEntry, validate_entry


def test_solo_valid_trims_values():
    entry, errors = validate_entry("solo", valid_fields("solo", team_leader_name="  Rahul Sharma  "))
    assert errors == {}
    assert isinstance(entry, SoloEntry)
    assert entry.team_leader_name == "Rahul Sharma"
    assert entry.youtube_vote is True


def test_solo_record_has_no_extra_players():
    entry, _ = validate_entry("solo", valid_fields("solo", player2_name="Extra Guy", team_name="Team X"))
    record = entry.to_record("solo")
    assert record["team_name"] is None
    for slot in (2, 3, 4):
        assert record[f"player{slot}_name"] is None
        assert record[f"player{slot}_id"] is None
    assert record["team_leader_whatsapp"] == "9876543210"


def test_duo_record_drops_extra_players():
    extra = {"player3_name": "Vikram Singh", "player3_id": "5345678901", "player4_name": "Arjun Mehta"}
    entry, errors = validate_entry("duo", valid_fields("duo", **extra))
    assert errors == {}
    record = entry.to_record("duo")
    assert record["team_name"] == "Night Owls"
    assert record["player2_name"] == "Amit Kumar"
    assert record["player2_id"] == "5234567890"
    for slot in (3, 4):
        assert record[f"player{slot}_name"] is None
        assert record[f"player{slot}_id"] is None


def test_squad_record_populates_all_players():
    entry, errors = validate_entry("squad", valid_fields("squad"))
    assert errors == {}
    assert isinstance(entry, SquadEntry)
    record = entry.to_record("squad")
    assert record["team_name"] == "Alpha Wolves"
    assert [record[f"player{s}_name"] for s in (2, 3, 4)] == ["Amit Kumar", "Vikram Singh", "Arjun Mehta"]


def test_duo_extends_solo_and_squad_extends_duo():
    assert issubclass(DuoEntry, SoloEntry)
    assert issubclass(SquadEntry, DuoEntry)
    entry, _ = validate_entry("duo", valid_fields("duo"))
    record = entry.to_record("duo")
    assert record["player2_name"] == "Amit Kumar"
    assert record["player3_name"] is None


def test_name_rules():
    _, errors = validate_entry("solo", valid_fields("solo", team_leader_name="Ra"))
    assert errors["team_leader_name"] == ["Name must be at least 3 characters"]
    _, errors = validate_entry("solo", valid_fields("solo", team_leader_name="Rahul_99"))
    assert errors["team_leader_name"] == ["Name should only contain letters"]
    _, errors = validate_entry("solo", valid_fields("solo", team_leader_name="R" * 51))
    assert errors["team_leader_name"] == ["Name must be less than 50 characters"]


def test_leader_id_digits_only_but_teammate_ids_free_text():
    _, errors = validate_entry("solo", valid_fields("solo", team_leader_id="ABC12345"))
    assert errors["team_leader_id"] == ["Game ID must contain only numbers"]
    entry, errors = validate_entry("duo", valid_fields("duo", player2_id="AMIT-0042"))
    assert errors == {}
    assert entry.player2_id == "AMIT-0042"
    _, errors = validate_entry("duo", valid_fields("duo", player2_id="1234"))
    assert errors["player2_id"] == ["Game ID must be at least 5 characters"]


def test_whatsapp_indian_mobile():
    for bad in ("5876543210", "987654321", "98765432101", "98765abcde"):
        _, errors = validate_entry("solo", valid_fields("solo", whatsapp=bad))
        assert errors["whatsapp"] == ["Please enter valid 10-digit Indian mobile number"], bad


def test_transaction_id_length():
    _, errors = validate_entry("solo", valid_fields("solo", transaction_id="TXN123"))
    assert errors["transaction_id"] == ["Transaction ID must be at least 8 characters"]


def test_team_name_rules():
    _, errors = validate_entry("duo", valid_fields("duo", team_name="Owls!"))
    assert errors["team_name"] == ["Team name should only contain letters and numbers"]
    _, errors = validate_entry("duo", valid_fields("duo", team_name="T" * 31))
    assert errors["team_name"] == ["Team name must be less than 30 characters"]


def test_missing_fields_reported_per_field():
    entry, errors = validate_entry("squad", {"team_name": "Alpha Wolves"})
    assert entry is None
    assert errors["player4_id"] == ["This field is required"]
    assert errors["whatsapp"] == ["This field is required"]
    assert "team_name" not in errors


def test_youtube_vote_parsed_from_form_value():
    entry, _ = validate_entry("solo", valid_fields("solo", youtube_vote="false"))
    assert entry.youtube_vote is False
