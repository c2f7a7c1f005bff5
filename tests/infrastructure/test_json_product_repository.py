"""Tests for the JSON-file product repository, against a temp directory."""

import asyncio
import json

import pytest

from catalog.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    StorageError,
    ValidationError,
)
from catalog.domain.model.product import NAME_RULE, QUANTITY_RULE, NewProduct
from catalog.infrastructure.persistence import json_product_repository
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@pytest.fixture
def repo(tmp_path):
    return JsonProductRepository(tmp_path / "data" / "products.json")


def _add(repo, name="Widget", supplier_id=1, stock=5):
    data = NewProduct(name=name, price=9.99, stock=stock, supplier_id=supplier_id)
    return asyncio.run(repo.create(data))


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        JsonProductRepository(path)
        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_assigns_sequential_ids(self, repo):
        first = _add(repo)
        second = _add(repo, name="Gadget")
        assert (first.id, second.id) == (1, 2)

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "products.json"
        _add(JsonProductRepository(path))
        reopened = JsonProductRepository(path)
        product = asyncio.run(reopened.find_one(1, 1))
        assert product.name == "Widget"
        assert product.price == 9.99
        assert product.stock == 5

    def test_find_all_filters_by_supplier(self, repo):
        _add(repo, supplier_id=1)
        _add(repo, name="Gizmo", supplier_id=2)
        names = [p.name for p in asyncio.run(repo.find_all(2))]
        assert names == ["Gizmo"]

    def test_find_one_of_other_supplier_is_none(self, repo):
        _add(repo, supplier_id=1)
        assert asyncio.run(repo.find_one(2, 1)) is None

    def test_create_rejects_invalid_data(self, repo):
        data = NewProduct(name="ab", price=1.0, stock=1, supplier_id=None)
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(repo.create(data))
        assert exc_info.value.messages == [NAME_RULE, "Supplier is required"]

    def test_update_writes_fields(self, repo):
        _add(repo)
        asyncio.run(repo.update(1, 1, {"name": "Renamed", "stock": 0}))
        product = asyncio.run(repo.find_one(1, 1))
        assert product.name == "Renamed"
        assert product.stock == 0

    def test_update_unknown_product(self, repo):
        with pytest.raises(EntityNotFoundError):
            asyncio.run(repo.update(7, 1, {"name": "Renamed"}))

    def test_update_rejects_unknown_field(self, repo):
        _add(repo)
        with pytest.raises(ValidationError, match="Unknown field: supplier_id"):
            asyncio.run(repo.update(1, 1, {"supplier_id": 2}))

    def test_delete_is_idempotent(self, repo):
        _add(repo)
        asyncio.run(repo.delete(1, 1))
        asyncio.run(repo.delete(1, 1))
        assert asyncio.run(repo.find_all(1)) == []

    def test_reduce_stock_is_conditional(self, repo):
        _add(repo, stock=5)
        assert asyncio.run(repo.reduce_stock(1, 1, 5)).stock == 0
        with pytest.raises(InsufficientStockError):
            asyncio.run(repo.reduce_stock(1, 1, 1))

    def test_concurrent_reductions_never_go_negative(self, repo):
        _add(repo, stock=5)

        async def reduce_all_then_read():
            outcomes = await asyncio.gather(
                *(repo.reduce_stock(1, 1, 2) for _ in range(4)),
                return_exceptions=True,
            )
            return outcomes, await repo.find_one(1, 1)

        outcomes, product = asyncio.run(reduce_all_then_read())
        failures = [o for o in outcomes if isinstance(o, InsufficientStockError)]
        assert len(failures) == 2
        assert product.stock == 1

    def test_corrupt_file_is_storage_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json", encoding="utf-8")
        repo = JsonProductRepository(path)
        with pytest.raises(StorageError):
            asyncio.run(repo.find_all(1))

    @pytest.mark.parametrize("quantity", [1.5, True, "2"])
    def test_reduce_stock_rejects_non_integer_quantity(self, repo, quantity):
        _add(repo, stock=5)
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(repo.reduce_stock(1, 1, quantity))
        assert exc_info.value.messages == [QUANTITY_RULE]
        assert asyncio.run(repo.find_one(1, 1)).stock == 5

    def test_reads_run_alongside_writes(self, repo):
        async def write_and_read():
            writes = [
                repo.create(NewProduct(name=f"Item {n}", price=1.0, stock=n, supplier_id=1))
                for n in range(5)
            ]
            reads = [repo.find_all(1) for _ in range(5)]
            results = await asyncio.gather(*writes, *reads)
            return results[5:], await repo.find_all(1)

        snapshots, final = asyncio.run(write_and_read())
        for snapshot in snapshots:
            assert 0 <= len(snapshot) <= 5
        assert sorted(p.id for p in final) == [1, 2, 3, 4, 5]


class TestJsonProductRepositoryWrites:

    def test_no_temporary_files_left_behind(self, tmp_path):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path)
        _add(repo)
        _add(repo, name="Gadget")
        assert [p.name for p in tmp_path.iterdir()] == ["products.json"]

    def test_failed_write_keeps_previous_file(self, tmp_path, monkeypatch):
        path = tmp_path / "products.json"
        repo = JsonProductRepository(path)
        _add(repo)
        before = path.read_text(encoding="utf-8")

        def refuse(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(json_product_repository.os, "replace", refuse)
        with pytest.raises(StorageError):
            _add(repo, name="Gadget")

        assert path.read_text(encoding="utf-8") == before
        assert [p.name for p in tmp_path.iterdir()] == ["products.json"]
