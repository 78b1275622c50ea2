"""Tests for the order JSON codec and the store factory."""

from __future__ import annotations

import json

import pytest

from pancake_lab.core.config import Settings, StoreConfig
from pancake_lab.core.enums import StoreBackend
from pancake_lab.core.errors import ConfigError, InvalidArgument
from pancake_lab.storage.codec import dumps, loads, order_from_dict, order_to_dict
from pancake_lab.storage.factory import build_store
from pancake_lab.storage.file_store import JsonFileOrderStore
from pancake_lab.storage.memory_store import InMemoryOrderStore


class TestCodec:
    def test_dict_shape(self, completed_order):
        d = order_to_dict(completed_order)
        assert d["status"] == "completed"
        assert d["pancakes"][0]["ingredients"] == [
            {"name": "Flour", "category": "flour"},
            {"name": "Egg", "category": "egg"},
        ]
        json.dumps(d)  # JSON-safe

    def test_round_trip_preserves_everything(self, completed_order):
        restored = loads(dumps(completed_order))
        assert restored.id == completed_order.id
        assert restored.building == completed_order.building
        assert restored.room == completed_order.room
        assert restored.status == completed_order.status
        assert restored.pancakes == completed_order.pancakes
        assert restored.created_at == completed_order.created_at
        assert restored.updated_at == completed_order.updated_at

    def test_loads_accepts_bytes(self, new_order):
        assert loads(dumps(new_order).encode()).id == new_order.id

    def test_missing_field_rejected(self, new_order):
        d = order_to_dict(new_order)
        del d["status"]
        with pytest.raises(InvalidArgument, match="Malformed order payload"):
            order_from_dict(d)

    def test_unknown_status_rejected(self, new_order):
        d = order_to_dict(new_order)
        d["status"] = "lost"
        with pytest.raises(InvalidArgument):
            order_from_dict(d)

    @pytest.mark.parametrize("payload", ['"oops"', "[]", '{"pancakes": [1]}', "not json"])
    def test_wrong_shape_rejected(self, payload):
        with pytest.raises(InvalidArgument, match="Malformed order payload"):
            loads(payload)

    def test_non_object_ingredient_rejected(self, completed_order):
        d = order_to_dict(completed_order)
        d["pancakes"][0]["ingredients"] = ["Flour"]
        with pytest.raises(InvalidArgument, match="ingredient must be an object"):
            order_from_dict(d)

    def test_invalid_ingredient_rejected(self, completed_order):
        d = order_to_dict(completed_order)
        d["pancakes"][0]["ingredients"].append({"name": "", "category": "flour"})
        with pytest.raises(InvalidArgument):
            order_from_dict(d)


class TestBuildStore:
    def test_memory_default(self):
        assert isinstance(build_store(Settings()), InMemoryOrderStore)

    def test_file_backend(self, tmp_path):
        settings = Settings(
            store=StoreConfig(backend=StoreBackend.FILE, path=str(tmp_path / "o.jsonl"))
        )
        store = build_store(settings)
        assert isinstance(store, JsonFileOrderStore)
        assert store.path == tmp_path / "o.jsonl"

    def test_invalid_config_rejected(self):
        settings = Settings(store=StoreConfig(backend=StoreBackend.FILE, path=""))
        with pytest.raises(ConfigError):
            build_store(settings)
