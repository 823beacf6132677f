"""Unit tests for ParameterCache (easy_cfhighlander.params.cache)."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from easy_cfhighlander.exceptions import CacheFormatError
from easy_cfhighlander.params.cache import ParameterCache


class TestParameterCacheLoad:
    @pytest.mark.unit
    def test_missing_file_is_empty(self, tmp_path: Path):
        assert ParameterCache(tmp_path / "nope.yaml").load() == {}

    @pytest.mark.unit
    def test_empty_document_is_empty(self, tmp_path: Path):
        path = tmp_path / "params.yaml"
        path.write_text("", encoding="utf-8")
        assert ParameterCache(path).load() == {}

    @pytest.mark.unit
    def test_non_mapping_rejected(self, tmp_path: Path):
        path = tmp_path / "params.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(CacheFormatError, match="mapping"):
            ParameterCache(path).load()

    @pytest.mark.unit
    def test_invalid_yaml_rejected(self, tmp_path: Path):
        path = tmp_path / "params.yaml"
        path.write_text("project: [unclosed\n", encoding="utf-8")
        with pytest.raises(CacheFormatError):
            ParameterCache(path).load()

    @pytest.mark.unit
    def test_loads_scalars(self, tmp_path: Path):
        path = tmp_path / "params.yaml"
        path.write_text("project: acme\nredis_enabled: true\n", encoding="utf-8")
        assert ParameterCache(path).load() == {"project": "acme", "redis_enabled": True}


class TestParameterCacheSave:
    @pytest.mark.unit
    def test_creates_parent_dirs(self, cache: ParameterCache):
        cache.save({"project": "acme"})
        assert cache.path.exists()

    @pytest.mark.unit
    def test_keeps_scalar_types(self, cache: ParameterCache):
        cache.save({"dev_account": "111", "redis_enabled": False})
        assert cache.load() == {"dev_account": "111", "redis_enabled": False}
        raw = yaml.safe_load(cache.path.read_text(encoding="utf-8"))
        assert isinstance(raw["dev_account"], str)

    @pytest.mark.unit
    def test_keeps_insertion_order(self, cache: ParameterCache):
        cache.save({"zeta": "z", "alpha": "a"})
        lines = cache.path.read_text(encoding="utf-8").splitlines()
        assert lines == ["zeta: z", "alpha: a"]

    @pytest.mark.unit
    def test_overwrites_in_full(self, cache: ParameterCache):
        cache.save({"project": "acme", "sqs_queue": "acme"})
        cache.save({"project": "other"})
        assert cache.load() == {"project": "other"}

    @pytest.mark.unit
    def test_identical_saves_are_byte_identical(self, cache: ParameterCache):
        params = {"project": "acme", "redis_enabled": True}
        cache.save(params)
        first = cache.path.read_bytes()
        cache.save(params)
        assert cache.path.read_bytes() == first
