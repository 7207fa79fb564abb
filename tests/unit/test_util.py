from infradb.db.util import (
    compare_string_lists_ignore_order,
    get_advisory_lock_id_from_string,
    get_string_to_tsquery,
    get_string_to_uint64_hash,
    is_str_in_list,
    now_utc,
)


def test_tsquery_prefix_tokens():
    assert get_string_to_tsquery("web server-01") == "web:* | server:* | 01:*"
    assert get_string_to_tsquery("  single ") == "single:*"


def test_tsquery_drops_operator_characters():
    assert get_string_to_tsquery("a & b | !c") == "a:* | b:* | c:*"
    assert get_string_to_tsquery("&|!()") == ""
    assert get_string_to_tsquery("") == ""


def test_uint64_hash_is_stable_fnv1a():
    # FNV-1a 64 reference values
    assert get_string_to_uint64_hash("") == 0xCBF29CE484222325
    assert get_string_to_uint64_hash("a") == 0xAF63DC4C8601EC8C
    assert get_string_to_uint64_hash("site-1") == get_string_to_uint64_hash("site-1")
    assert get_string_to_uint64_hash("site-1") != get_string_to_uint64_hash("site-2")


def test_advisory_lock_id_fits_signed_bigint():
    for value in ("", "a", "tenant/instance/very-long-identifier" * 5):
        lock_id = get_advisory_lock_id_from_string(value)
        assert 0 <= lock_id <= 2**63 - 1


def test_is_str_in_list():
    assert is_str_in_list("Ready", ["Pending", "Ready"])
    assert not is_str_in_list("Error", ["Pending", "Ready"])
    assert not is_str_in_list("Ready", None)


def test_compare_string_lists_ignore_order():
    assert compare_string_lists_ignore_order(["a", "b"], ["b", "a"])
    assert compare_string_lists_ignore_order(None, [])
    assert not compare_string_lists_ignore_order(["a", "a"], ["a"])
    assert not compare_string_lists_ignore_order(["a"], ["b"])


def test_now_utc_is_aware():
    assert now_utc().utcoffset().total_seconds() == 0
