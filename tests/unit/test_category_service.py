"""
Tests for category and subcategory management.
"""
import pytest
from fastapi import HTTPException

from app.models.category import Category
from app.schemas import CategoryUpdate
from app.services.category_service import category_service


@pytest.mark.unit
class TestCategoryService:

    def test_create_starts_without_subcategories(self, test_db):
        category = category_service.create_category(test_db, "Despensa", "🥫")

        assert category.id is not None
        assert category.subcategories == []
        assert category.icon == "🥫"

    def test_duplicate_name_rejected(self, test_db):
        category_service.create_category(test_db, "Despensa", "🥫")

        with pytest.raises(HTTPException) as exc:
            category_service.create_category(test_db, "Despensa", "🫙")
        assert exc.value.status_code == 400

    def test_list_is_ordered_by_name(self, test_db):
        for name in ["Limpieza", "Bebidas", "Despensa"]:
            category_service.create_category(test_db, name, "")

        assert [c.name for c in category_service.list_categories(test_db)] == [
            "Bebidas", "Despensa", "Limpieza"
        ]

    def test_add_and_remove_subcategories(self, test_db):
        category = category_service.create_category(test_db, "Limpieza", "🧽")

        category_service.add_subcategory(test_db, category.id, "Detergente")
        category_service.add_subcategory(test_db, category.id, "Suavizante")
        category_service.add_subcategory(test_db, category.id, "Cloro")
        category_service.remove_subcategory(test_db, category.id, "Suavizante")

        test_db.expire_all()
        assert test_db.get(Category, category.id).subcategories == ["Detergente", "Cloro"]

    def test_duplicate_subcategory_rejected(self, test_db):
        category = category_service.create_category(test_db, "Limpieza", "🧽")
        category_service.add_subcategory(test_db, category.id, "Detergente")

        with pytest.raises(HTTPException) as exc:
            category_service.add_subcategory(test_db, category.id, "Detergente")
        assert exc.value.status_code == 400

    def test_removing_absent_subcategory_is_a_no_op(self, test_db):
        category = category_service.create_category(test_db, "Limpieza", "🧽")

        updated = category_service.remove_subcategory(test_db, category.id, "Nada")

        assert updated.subcategories == []

    def test_update_applies_only_given_fields(self, test_db):
        category = category_service.create_category(test_db, "Limpieza", "🧽")

        updated = category_service.update_category(test_db, category.id, CategoryUpdate(icon="🧼"))

        assert updated.name == "Limpieza"
        assert updated.icon == "🧼"

    def test_update_rejects_taken_name(self, test_db):
        category_service.create_category(test_db, "Limpieza", "")
        bebidas = category_service.create_category(test_db, "Bebidas", "")

        with pytest.raises(HTTPException) as exc:
            category_service.update_category(test_db, bebidas.id, CategoryUpdate(name="Limpieza"))
        assert exc.value.status_code == 400

    def test_delete(self, test_db):
        category = category_service.create_category(test_db, "Limpieza", "")

        category_service.delete_category(test_db, category.id)

        with pytest.raises(HTTPException) as exc:
            category_service.get_category(test_db, category.id)
        assert exc.value.status_code == 404
