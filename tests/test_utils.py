"""Tests for payload, object name and metadata generation."""

import string

import pytest

from s3putbench.utils import (
    format_bytes,
    format_duration,
    generate_metadata,
    generate_payload,
    object_names,
    random_string,
)


@pytest.mark.parametrize("size", [0, 1, 4096, 1024 * 1024])
def test_payload_has_exact_length(size):
    data = generate_payload(size)
    assert isinstance(data, bytes)
    assert len(data) == size


def test_payload_uses_single_filler_byte():
    assert set(generate_payload(100)) == {ord("a")}


@pytest.mark.parametrize("count", [0, 1, 7, 500])
def test_object_names_count_and_distinct(count):
    names = object_names(count)
    assert len(names) == count
    assert len(set(names)) == count


def test_object_names_start_at_one():
    assert object_names(3) == ["object1", "object2", "object3"]


def test_object_names_namespaced_by_node():
    names = object_names(2, node="node-7")
    assert names == ["node-7-object1", "node-7-object2"]
    assert set(names).isdisjoint(object_names(2, node="node-8"))


def test_random_string_letters_only():
    value = random_string(256)
    assert len(value) == 256
    assert set(value) <= set(string.ascii_letters)


def test_metadata_keys_and_value_sizes():
    meta = generate_metadata(4, 32)
    assert sorted(meta) == [
        "test-metadata-key-1",
        "test-metadata-key-2",
        "test-metadata-key-3",
        "test-metadata-key-4",
    ]
    assert all(len(v) == 32 for v in meta.values())


def test_metadata_empty_when_count_zero():
    assert generate_metadata(0, 1024) == {}


def test_metadata_zero_size_values():
    meta = generate_metadata(3, 0)
    assert len(meta) == 3
    assert set(meta.values()) == {""}


def test_format_bytes():
    assert format_bytes(512) == "512B"
    assert format_bytes(2048) == "2.0KB"
    assert format_bytes(10 * 1024 * 1024) == "10.0MB"
    assert format_bytes(3 * 1024**3) == "3.0GB"


def test_format_duration():
    assert format_duration(0.25) == "250.0ms"
    assert format_duration(2.5) == "2.500s"
    assert format_duration(125) == "2m5s"
    assert format_duration(7260) == "2h1m"
