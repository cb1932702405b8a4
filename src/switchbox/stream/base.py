"""
The duplex stream primitive that the switcher consumes and provides.

A duplex endpoint has a writable side, which accepts chunks via write(), and a readable side,
which notifies subscribers of the chunks it produces through data, end and error events.
"""
import logging
from abc import abstractmethod
from collections import deque

from switchbox.support.events import EventSource

logger = logging.getLogger(__name__)

DATA = 'data'
END = 'end'
ERROR = 'error'

EVENT_KINDS = (DATA, END, ERROR)


class StreamError(Exception):
    """ Base class for errors reported by streams in this package. """


class DuplexEndpoint:
    """
    The capabilities required of any stream that can be attached to a switcher.
    """

    @abstractmethod
    def write(self, chunk) -> bool:
        """ accepts one chunk. Returns True when the chunk has been accepted. """
        raise NotImplementedError

    @abstractmethod
    def on(self, kind, handler):
        """ subscribes handler to the events of the given kind (DATA, END or ERROR). """
        raise NotImplementedError

    @abstractmethod
    def off(self, kind, handler):
        """ unsubscribes a handler previously given to on(). """
        raise NotImplementedError

    @abstractmethod
    def pause(self):
        raise NotImplementedError

    @abstractmethod
    def resume(self):
        raise NotImplementedError

    @property
    @abstractmethod
    def paused(self) -> bool:
        raise NotImplementedError


class Duplex(DuplexEndpoint):
    """
    A basic duplex stream.

    Chunks pushed to the readable side are delivered to data handlers while the stream is flowing,
    that is, not paused and with at least one data handler. Otherwise they are held until the stream
    starts flowing. Pushing None signals the end of the readable side; the end event fires once
    all held chunks have been delivered.

    Subclasses implement _write() to consume written chunks and may implement _final() to
    react to end().
    """

    def __init__(self):
        self.events = {kind: EventSource() for kind in EVENT_KINDS}
        self._readable = deque()
        self._paused = False
        self._flowing = False
        self._ending = False
        self._ended = False
        self._finished = False

    def on(self, kind, handler):
        self._events(kind).add(handler)
        if kind == DATA:
            self._flush()
        return self

    def off(self, kind, handler):
        self._events(kind).remove(handler)
        return self

    def _events(self, kind) -> EventSource:
        try:
            return self.events[kind]
        except KeyError:
            raise ValueError("unknown event kind '%s'" % kind)

    def write(self, chunk) -> bool:
        self._write(chunk)
        return True

    def end(self):
        """ finishes the writable side of this stream. Further calls have no effect. """
        if not self._finished:
            self._finished = True
            self._final()

    @abstractmethod
    def _write(self, chunk):
        raise NotImplementedError

    def _final(self):
        """ called once when the writable side is finished. """

    def push(self, chunk):
        """
        Adds a chunk to the readable side of this stream. None marks the end of the stream.
        """
        if self._ending:
            logger.debug("discarding chunk pushed after end on %s" % self)
            return
        if chunk is None:
            self._ending = True
        else:
            self._readable.append(chunk)
        self._flush()

    def _flush(self):
        if self._flowing:   # re-entrant push from a data handler
            return
        self._flowing = True
        try:
            data = self.events[DATA]
            while self._readable and not self._paused and len(data):
                data.fire(self._readable.popleft())
        finally:
            self._flowing = False
        if self._ending and not self._readable and not self._ended:
            self._ended = True
            self.events[END].fire()

    def emit_error(self, error):
        """
        Notifies error handlers of an error. Errors without a handler are logged.
        """
        errors = self.events[ERROR]
        if len(errors):
            errors.fire(error)
        else:
            logger.error("unhandled error on %s: %s" % (self, error))

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False
        self._flush()

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def ended(self) -> bool:
        """ True once the end event has fired. """
        return self._ended

    @property
    def buffered(self) -> int:
        """ the number of pushed chunks not yet delivered to data handlers. """
        return len(self._readable)


class PassThrough(Duplex):
    """
    A duplex stream whose readable side produces exactly what is written to it.
    """

    def _write(self, chunk):
        self.push(chunk)

    def _final(self):
        self.push(None)
