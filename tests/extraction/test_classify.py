"""Tests for the file-size page classifier."""

import pytest

from nihonto.extraction.classify import THRESHOLD_KB, PageCategory, classify_page, classify_size


@pytest.mark.parametrize("size_kb", [151, 200, 210, 1024])
def test_large_pages_are_illustrations(size_kb):
    """Pages above 150 KB are oshigata."""
    assert classify_size(size_kb * 1024) is PageCategory.ILLUSTRATION


@pytest.mark.parametrize("size_kb", [0, 50, 100, 149])
def test_small_pages_are_descriptions(size_kb):
    """Pages below 150 KB are setsumei."""
    assert classify_size(size_kb * 1024) is PageCategory.DESCRIPTION


def test_exact_threshold_is_description():
    """Exactly 150 KB is not strictly greater, so it stays a description."""
    assert classify_size(THRESHOLD_KB * 1024) is PageCategory.DESCRIPTION
    assert classify_size(THRESHOLD_KB * 1024 + 1) is PageCategory.ILLUSTRATION


def test_classify_page_reads_size_from_disk(tmp_dir):
    """classify_page uses the encoded file size only."""
    big = tmp_dir / "big.jpg"
    small = tmp_dir / "small.jpg"
    big.write_bytes(b"\x00" * 200 * 1024)
    small.write_bytes(b"\x00" * 50 * 1024)

    assert classify_page(big) is PageCategory.ILLUSTRATION
    assert classify_page(small) is PageCategory.DESCRIPTION

    # no side effects
    assert big.stat().st_size == 200 * 1024


def test_storage_labels():
    assert PageCategory.ILLUSTRATION.storage_label == "oshigata"
    assert PageCategory.DESCRIPTION.storage_label == "setsumei"
