import unittest
from unittest.mock import Mock, call

from hamcrest import assert_that, is_, empty

from switchbox.support.events import EventSource


class EventsTest(unittest.TestCase):

    def test_handlers_empty(self):
        sut = EventSource()
        assert_that(sut.handlers(), is_(empty()))
        assert_that(len(sut), is_(0))

    def test_handlers_not_empty(self):
        sut = EventSource()
        handler = Mock()
        sut.add(handler)
        assert_that(list(sut.handlers()), is_([handler]))
        assert_that(len(sut), is_(1))

    def test_no_listeners(self):
        sut = EventSource()
        sut.fire(1)

    def test_manage_handlers(self):
        sut = EventSource()
        m1 = Mock()
        sut.add(m1)
        assert_that(sut._handlers, is_([m1]))

        sut.remove(m1)
        assert_that(sut._handlers, is_([]))

        # removing an unknown handler is quiet
        sut.remove(m1)
        assert_that(sut._handlers, is_([]))

        sut += m1
        assert_that(sut._handlers, is_([m1]))

        sut -= m1
        assert_that(sut._handlers, is_([]))

    def test_clear(self):
        sut = EventSource()
        sut += Mock()
        sut += Mock()
        sut.clear()
        assert_that(sut.handlers(), is_(empty()))

    def test_fire_all_with_empty_events(self):
        sut = EventSource()
        m1 = Mock()
        sut.add(m1)
        sut.fire_all([])
        m1.assert_not_called()

    def test_listeners(self):
        sut = EventSource()
        l1 = Mock()
        l2 = Mock()
        sut += l1
        sut += l2
        sut.fire(1, v="hey")
        l1.assert_called_once_with(1, v="hey")
        l2.assert_called_once_with(1, v="hey")

        l1.reset_mock()
        l2.reset_mock()

        sut.fire_all([1, 2, 3])
        l1.assert_has_calls([call(1), call(2), call(3)])

    def test_handler_removed_during_fire_still_notified(self):
        sut = EventSource()
        second = Mock()

        def first(value):
            sut.remove(second)

        sut += first
        sut += second
        sut.fire("x")
        second.assert_called_once_with("x")

        second.reset_mock()
        sut.fire("y")
        second.assert_not_called()
