"""Settings validation."""

import unittest

from pydantic import ValidationError

from larder.core.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite+pysqlite:///:memory:",
        "JWT_ACCESS_SECRET": "access-secret",
        "JWT_REFRESH_SECRET": "refresh-secret",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = make_settings()
        self.assertEqual(s.JWT_ACCESS_EXPIRE_MINUTES, 60)
        self.assertEqual(s.JWT_REFRESH_EXPIRE_MINUTES, 10080)
        self.assertEqual(s.API_V1_PREFIX, "/api/v1")

    def test_secrets_must_differ(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_REFRESH_SECRET="access-secret")

    def test_empty_secret(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_ACCESS_SECRET="   ")

    def test_database_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mysql://root@localhost/larder")
        self.assertTrue(
            make_settings(DATABASE_URL="postgresql://u:p@db:5432/larder").DATABASE_URL.startswith(
                "postgresql://"
            )
        )

    def test_api_key_header_is_normalized(self) -> None:
        self.assertEqual(make_settings(API_KEY_HEADER=" X-Api-Key ").API_KEY_HEADER, "x-api-key")

    def test_bounds(self) -> None:
        for field, value in (
            ("BCRYPT_ROUNDS", 3),
            ("JWT_ACCESS_EXPIRE_MINUTES", 0),
            ("TOKEN_SWEEP_INTERVAL_SECONDS", 5),
        ):
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    make_settings(**{field: value})

    def test_secrets_are_not_printed(self) -> None:
        self.assertNotIn("access-secret", repr(make_settings()))


if __name__ == "__main__":
    unittest.main()
