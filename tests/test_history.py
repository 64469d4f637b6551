import io

from menucli.history import History


def test_not_full():
    history = History(10)
    for item in ("item1", "item2", "item3", "item4"):
        history.new_command(item)

    assert history.next() == ""
    assert history.previous("") == "item4"
    assert history.next() == ""
    assert history.previous("") == "item4"
    assert history.previous("item4") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item1"
    assert history.previous("item1") == "item1"


def test_full():
    history = History(3)
    for item in ("item1", "item2", "item3", "item4"):
        history.new_command(item)

    assert history.previous("") == "item4"
    assert history.next() == ""
    assert history.previous("") == "item4"
    assert history.previous("item4") == "item3"
    assert history.previous("item3") == "item3"
    assert history.previous("item3") == "item3"
    assert history.previous("item3") == "item3"
    assert history.next() == "item4"
    assert history.next() == ""


def test_insertion():
    history = History(10)
    for item in ("item1", "item2", "item3", "item4"):
        history.new_command(item)

    assert history.previous("") == "item4"
    assert history.previous("item4") == "item3"
    assert history.previous("foo") == "item2"
    assert history.next() == "foo"
    assert history.next() == "item4"
    assert history.previous("item4") == "foo"
    assert history.previous("foo") == "item2"

    history.new_command("item5")

    assert history.previous("") == "item5"
    assert history.previous("item5") == "item4"
    assert history.next() == "item5"
    assert history.next() == ""


def test_insertion_ignore_repeat():
    history = History(10)
    for item in (
        "item1", "item2", "item2", "item1", "item1",
        "item3", "item3", "item3", "item1", "item1", "item1",
    ):
        history.new_command(item)

    assert history.previous("") == "item1"
    assert history.previous("item1") == "item3"
    assert history.previous("item3") == "item1"
    assert history.previous("item1") == "item2"
    assert history.previous("item2") == "item1"
    assert history.next() == "item2"
    assert history.next() == "item1"
    assert history.next() == "item3"
    assert history.next() == "item1"


def test_empty():
    history = History(10)
    assert history.next() == ""
    assert history.previous("") == ""

    history2 = History(10)
    assert history2.previous("") == ""
    assert history2.next() == ""

    history3 = History(10)
    assert history3.previous("") == ""
    history3.new_command("item1")
    assert history3.next() == ""
    assert history3.previous("") == "item1"


def test_copies_large_buffer():
    history = History(10)
    history.load_commands(["item1", "item2", "item3"])

    assert history.previous("") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item1"
    assert history.previous("item1") == "item1"

    history.new_command("itemA")
    history.new_command("itemB")

    assert history.previous("") == "itemB"
    assert history.previous("itemB") == "itemA"
    assert history.previous("itemA") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item1"

    assert history.get_commands() == ["itemA", "itemB"]


def test_copies_small_buffer():
    history = History(3)
    history.load_commands(["item1", "item2", "item3"])

    assert history.previous("") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item2"

    history.new_command("itemA")
    history.new_command("itemB")

    assert history.previous("") == "itemB"
    assert history.previous("itemB") == "itemA"
    assert history.previous("itemA") == "itemA"

    assert history.get_commands() == ["itemA", "itemB"]


def test_copies_overflow():
    history = History(3)
    for item in ("itemA", "itemB", "itemC", "itemD", "itemE"):
        history.new_command(item)

    assert history.get_commands() == ["itemC", "itemD", "itemE"]


def test_loaded_commands_are_not_returned():
    history = History(10)
    history.load_commands(["old1", "old2"])
    assert history.get_commands() == []


def test_show_lists_newest_first():
    history = History(10)
    history.new_command("first")
    history.new_command("second")
    out = io.StringIO()
    history.show(out)
    assert out.getvalue() == "\nsecond\nfirst\n\n"