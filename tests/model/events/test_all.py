# type: ignore
import pytest

from elasticmodel import BadRequestError, EventDispatcher, Model


class Post(Model):
    index = "posts"


class Observer:
    def __init__(self):
        self.events = []

    def saving(self, model):
        self.events.append("saving")

    def deleted(self, model):
        self.events.append("deleted")


def test_dispatch():
    dispatcher = EventDispatcher()
    calls = []
    dispatcher.listen(Post, "saving", lambda model: calls.append(1))
    dispatcher.listen(Post, "saving", lambda model: calls.append(2))

    assert dispatcher.dispatch("saving", Post()) is True
    assert calls == [1, 2]


def test_dispatch_halts():
    dispatcher = EventDispatcher()
    calls = []
    dispatcher.listen(Post, "saving", lambda model: False)
    dispatcher.listen(Post, "saving", lambda model: calls.append(1))

    assert dispatcher.dispatch("saving", Post(), halt=True) is False
    assert calls == []
    assert dispatcher.dispatch("saving", Post()) is True
    assert calls == [1]


def test_listeners_are_keyed_by_class():
    dispatcher = EventDispatcher()
    calls = []
    dispatcher.listen(Post, "saved", calls.append)

    dispatcher.dispatch("saved", Model())
    assert calls == []
    assert dispatcher.has_listeners(Post, "saved")
    assert not dispatcher.has_listeners(Model, "saved")


def test_unknown_event():
    with pytest.raises(BadRequestError):
        EventDispatcher().listen(Post, "exploded", lambda model: None)


def test_observe():
    dispatcher = EventDispatcher()
    observer = Observer()
    dispatcher.observe(Post, observer)

    post = Post()
    dispatcher.dispatch("saving", post)
    dispatcher.dispatch("deleted", post)
    dispatcher.dispatch("updated", post)
    assert observer.events == ["saving", "deleted"]


def test_forget_and_flush():
    dispatcher = EventDispatcher()
    dispatcher.listen(Post, "saving", lambda model: None)
    dispatcher.listen(Model, "saving", lambda model: None)

    dispatcher.forget(Post)
    assert not dispatcher.has_listeners(Post, "saving")
    assert dispatcher.has_listeners(Model, "saving")

    dispatcher.flush()
    assert not dispatcher.has_listeners(Model, "saving")
