from app.config import Settings, _parse_email_set


def test_parse_email_set_supports_comma_and_space() -> None:
    parsed = _parse_email_set(
        "Alice@example.com, bob@example.com  carol@example.com"
    )
    assert parsed == {
        "alice@example.com",
        "bob@example.com",
        "carol@example.com",
    }


def test_parse_email_set_supports_json_list() -> None:
    parsed = _parse_email_set('["Alice@example.com", "bob@example.com"]')
    assert parsed == {"alice@example.com", "bob@example.com"}


def test_parse_email_set_empty() -> None:
    assert _parse_email_set("   ") == set()


def test_postgres_url_uses_async_driver() -> None:
    config = Settings(database_url="postgres://user:pw@localhost:5432/lumora")
    assert config.database_url == "postgresql+asyncpg://user:pw@localhost:5432/lumora"
