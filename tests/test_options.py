"""Tests for default options and merging."""

import pytest

from discovery.options import Method, get_default_options, merge_options, set_default_options


class TestDefaultOptions:
    """Tests for the process-wide defaults."""

    def test_initial_defaults(self):
        """Test that defaults start with the line-scan method."""
        assert get_default_options() == {"method": Method.LINE_SCAN}

    def test_set_default_options(self):
        """Test that custom defaults are kept verbatim."""
        default = {"method": Method.PATH, "prefix": "src", "random": "value"}
        set_default_options(default)

        assert get_default_options() == default

    def test_empty_mapping_resets(self):
        """Test that an empty mapping restores the line-scan default."""
        set_default_options({"method": Method.TOKENS})
        set_default_options({})

        assert get_default_options() == {"method": Method.LINE_SCAN}

    def test_method_is_always_present(self):
        """Test that defaults without method gain one."""
        set_default_options({"prefix": "App\\"})

        assert get_default_options() == {"method": Method.LINE_SCAN, "prefix": "App\\"}

    def test_returned_copy_is_detached(self):
        """Test that mutating the returned mapping does not change defaults."""
        get_default_options()["method"] = Method.PATH

        assert get_default_options()["method"] is Method.LINE_SCAN


class TestMergeOptions:
    """Tests for merge_options()."""

    def test_caller_keys_win(self):
        """Test that explicit keys replace defaults."""
        set_default_options({"method": Method.PATH, "prefix": "Default\\"})

        merged = merge_options({"prefix": "Mine\\"})

        assert merged == {"method": Method.PATH, "prefix": "Mine\\"}

    def test_none_options(self):
        """Test merging nothing."""
        assert dict(merge_options(None)) == {"method": Method.LINE_SCAN}

    def test_merged_options_are_read_only(self):
        """Test that the merged mapping cannot be modified."""
        merged = merge_options({"prefix": "A\\"})

        with pytest.raises(TypeError):
            merged["prefix"] = "B\\"

    def test_defaults_changed_later_do_not_leak(self):
        """Test that merged options are a snapshot of the defaults."""
        merged = merge_options()
        set_default_options({"method": Method.TOKENS})

        assert merged["method"] is Method.LINE_SCAN
