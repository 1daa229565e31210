"""Tests for the minimap sampler and context window."""

import pytest

from speedread.services.minimap import MinimapEntry, context_window, sample


def make_words(count):
    return [f"w{i}" for i in range(count)]


class TestSample:
    def test_small_document_returned_whole(self):
        words = make_words(20)
        entries = sample(words, 7, max_visible=20)
        assert [e.index for e in entries] == list(range(20))
        assert [e.word for e in entries] == words
        assert [e.index for e in entries if e.is_current] == [7]

    def test_current_word_always_present(self):
        words = make_words(10_000)
        entries = sample(words, 4237, max_visible=100)
        assert any(e.index == 4237 for e in entries)
        assert entries[[e.index for e in entries].index(4237)].is_current

    def test_stride_aligned_entries(self):
        words = make_words(10_000)
        entries = sample(words, 0, max_visible=100)
        assert [e.index for e in entries] == list(range(0, 10_000, 100))

    def test_stride_rounds_up(self):
        words = make_words(250)
        entries = sample(words, 0, max_visible=100)
        # stride = ceil(250 / 100) = 3
        assert [e.index for e in entries] == list(range(0, 250, 3))

    def test_aligned_current_not_duplicated(self):
        words = make_words(10_000)
        entries = sample(words, 4200, max_visible=100)
        indices = [e.index for e in entries]
        assert indices.count(4200) == 1
        assert len(indices) == 100

    @pytest.mark.parametrize("current", [0, 1, 99, 101, 4237, 9_999])
    def test_ascending_without_duplicates(self, current):
        entries = sample(make_words(10_000), current, max_visible=100)
        indices = [e.index for e in entries]
        assert indices == sorted(set(indices))
        assert current in indices

    def test_current_after_last_stride(self):
        entries = sample(make_words(10_000), 9_999, max_visible=100)
        assert entries[-1] == MinimapEntry(word="w9999", index=9_999, is_current=True)

    def test_empty_words(self):
        assert sample([], 0, max_visible=10) == []

    def test_invalid_max_visible(self):
        with pytest.raises(ValueError):
            sample(make_words(5), 0, max_visible=0)


class TestContextWindow:
    def test_window_around_current(self):
        entries = context_window(make_words(500), 200, size=50)
        assert entries[0].index == 150
        assert entries[-1].index == 249
        assert len(entries) == 100
        assert [e.index for e in entries if e.is_current] == [200]

    def test_window_clamped_at_start(self):
        entries = context_window(make_words(500), 3, size=50)
        assert entries[0].index == 0
        assert entries[-1].index == 52

    def test_window_clamped_at_end(self):
        entries = context_window(make_words(60), 58, size=50)
        assert entries[0].index == 8
        assert entries[-1].index == 59
