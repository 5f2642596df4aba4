"""Development seed data."""

import unittest

from sqlalchemy import func, select

from larder.models import ApiKey, Drink, DrinkTag, Meal, MealTag, Tag, User
from larder.repositories import api_keys as api_key_store
from larder.repositories import users as user_store
from larder.scripts import seed
from tests.support import DatabaseTestCase


class TestSeed(DatabaseTestCase):
    def _count(self, model) -> int:
        return self.db.execute(select(func.count()).select_from(model)).scalar_one()

    def test_seed_creates_catalog_and_accounts(self) -> None:
        seed.seed(self.db)
        self.assertEqual(self._count(User), 4)
        self.assertEqual(self._count(Tag), seed.TAG_COUNT)
        self.assertEqual(self._count(Meal), len(seed.MEALS))
        self.assertEqual(self._count(Drink), len(seed.DRINKS))
        self.assertEqual(self._count(MealTag), len(seed.MEALS) * 3)
        self.assertEqual(self._count(DrinkTag), len(seed.DRINKS))
        self.assertTrue(api_key_store.is_active_key(self.db, seed.GENERAL_API_KEY))
        admin = user_store.get_user_with_roles(
            self.db, user_store.get_by_email(self.db, seed.ADMIN_EMAIL).id
        )
        self.assertEqual(admin.role_names, {"ADMIN"})

    def test_seed_is_repeatable(self) -> None:
        seed.seed(self.db)
        seed.seed(self.db)
        self.assertEqual(self._count(User), 4)
        self.assertEqual(self._count(Tag), seed.TAG_COUNT)
        self.assertEqual(self._count(ApiKey), 1)
        self.assertEqual(self._count(MealTag), len(seed.MEALS) * 3)


if __name__ == "__main__":
    unittest.main()
