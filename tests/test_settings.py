from db.database import fetch_rows
from routes.settings import get_app_settings, update_app_settings
from utils.settings import DEFAULT_SETTINGS, default_settings, deserialize_settings, serialize_settings


def test_new_database_has_default_settings(conn):
    settings = get_app_settings(conn)
    assert settings == default_settings()
    assert settings["TeacherModeEnabled"] is True
    assert settings["AllowSkipping"] is False
    assert settings["PrimaryColor"] == "#4285f4"


def test_booleans_are_stored_as_literal_flags(conn):
    update_app_settings(conn, {"AllowNotes": False, "Foo": True})
    stored = {values[0]: values[1] for _, values in fetch_rows(conn, "settings")}
    assert stored == {"AllowNotes": "FALSE", "Foo": "TRUE"}


def test_update_replaces_all_settings(conn):
    result = update_app_settings(conn, {"Foo": True, "PrimaryColor": "#000000"})
    assert result["success"] is True
    assert get_app_settings(conn) == {"Foo": True, "PrimaryColor": "#000000"}


def test_known_settings_keep_their_description(conn):
    update_app_settings(conn, {"AllowNotes": True, "Custom": "x"})
    descriptions = {values[0]: values[2] for _, values in fetch_rows(conn, "settings")}
    assert descriptions["AllowNotes"] == DEFAULT_SETTINGS["AllowNotes"][1]
    assert descriptions["Custom"] == ""


def test_empty_store_falls_back_to_defaults(conn):
    update_app_settings(conn, {})
    assert fetch_rows(conn, "settings") == []
    assert get_app_settings(conn) == default_settings()


def test_unreadable_store_falls_back_to_defaults(conn):
    conn.execute("DROP TABLE settings")
    assert get_app_settings(conn) == default_settings()
    assert "error" in update_app_settings(conn, {"Foo": True})


def test_deserialize_skips_blank_names_and_keeps_strings():
    rows = [("", "TRUE", ""), ("Name", "true", ""), ("Flag", "FALSE", ""), ("Flag", "TRUE", "")]
    assert deserialize_settings(rows) == {"Name": "true", "Flag": True}


def test_serialize_handles_none():
    assert serialize_settings({"Empty": None}) == [("Empty", "", "")]
