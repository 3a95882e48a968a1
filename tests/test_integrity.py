import pytest

from localturk.services.integrity import NO_NEW_KEYS_WARNING, FlashMessage, check_output


@pytest.mark.parametrize(
    "record",
    [
        {"uid": "bob"},
        {"a": "1", "b": "2", "uid": "bob"},
        {},
    ],
)
def test_warns_when_nothing_new_was_submitted(record):
    assert check_output(record, ["a", "b", "uid"]) == NO_NEW_KEYS_WARNING


def test_new_key_means_no_warning():
    assert check_output({"a": "1", "b": "2", "uid": "bob", "notes": ""}, ["a", "b", "uid"]) is None


def test_flash_is_shown_once():
    flash = FlashMessage()
    assert flash.take_and_clear() is None
    flash.set("first")
    flash.set("second")
    assert flash.take_and_clear() == "second"
    assert flash.take_and_clear() is None


def test_flash_slots_are_independent():
    one, two = FlashMessage(), FlashMessage()
    one.set("hello")
    assert two.take_and_clear() is None
    assert one.take_and_clear() == "hello"
