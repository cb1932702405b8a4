"""
A duplex stream that forwards to a backing stream which can be replaced at any time.

Producers write to the switcher and consumers read from it, while the stream actually carrying the
data is swapped underneath with switch(). Writes received while no stream is attached are either
dropped or, when configured, queued and replayed in order to the next stream attached.
"""
import logging
import threading
from collections import deque

from switchbox.config.options import SwitcherConfig
from switchbox.stream.base import Duplex, DATA, END, ERROR, StreamError

logger = logging.getLogger(__name__)


class BufferOverflowError(StreamError):
    """ A chunk was written while detached and the pending buffer was full. The chunk is dropped. """

    def __init__(self, chunk, capacity):
        super().__init__("buffer size limit of %d exceeded" % capacity)
        self.chunk = chunk
        self.capacity = capacity


class ForwardedStreamError(StreamError):
    """ The active stream reported an error. The original error is the cause. """

    def __init__(self, stream, error):
        super().__init__("active stream error: %s" % error)
        self.stream = stream
        self.error = error
        self.__cause__ = error


class StreamBinding:
    """
    The data, end and error handlers subscribed to one attached stream.

    A binding is created each time a stream is attached and discarded once detached. Notifications
    are passed on to the switcher together with the generation the binding was created for,
    so the switcher can ignore those from a stream that is no longer attached.
    """

    def __init__(self, switcher, stream, generation):
        self.switcher = switcher
        self.stream = stream
        self.generation = generation

    def _handlers(self):
        return (DATA, self.on_data), (END, self.on_end), (ERROR, self.on_error)

    def bind(self):
        for kind, handler in self._handlers():
            self.stream.on(kind, handler)

    def unbind(self):
        for kind, handler in self._handlers():
            self.stream.off(kind, handler)

    def on_data(self, chunk):
        self.switcher._stream_data(self.generation, chunk)

    def on_end(self):
        self.switcher._stream_end(self.generation)

    def on_error(self, error):
        self.switcher._stream_error(self.generation, self.stream, error)


class Switcher(Duplex):
    """
    A duplex stream wired to at most one active stream at a time.

    Chunks written to the switcher are written to the active stream; data, end and errors from
    the active stream are passed on by the switcher. The active stream is not owned: the switcher
    never closes or ends it, not even when it is replaced.

    The switcher is paused exactly when no stream is attached.

    Handlers subscribed to the switcher run while the switcher's lock is held. A handler must not
    wait on another thread that uses the switcher.

    :param initial_stream: the stream to attach on construction, or None to start detached.
    :param config: a SwitcherConfig, a mapping of options, or None for the defaults.
    :param log: the logger to use.
    """

    def __init__(self, initial_stream=None, config=None, log=logger):
        super().__init__()
        self.config = SwitcherConfig.coerce(config)
        self.logger = log
        self._lock = threading.RLock()
        self._pending = deque()
        self._draining = False
        self._generation = 0
        self._binding = None
        self._active = None
        self._detached = False    # paused because no stream is attached
        if initial_stream is None:
            self._detach_pause()
        else:
            self._attach(initial_stream)

    @property
    def active_stream(self):
        return self._active

    @property
    def attached(self) -> bool:
        return self._active is not None

    @property
    def pending(self) -> tuple:
        """ the chunks queued while detached, oldest first """
        with self._lock:
            return tuple(self._pending)

    @property
    def generation(self) -> int:
        """ increases each time the active stream is changed """
        return self._generation

    def switch(self, stream):
        """
        Replaces the active stream.

        The previous stream is unsubscribed from and otherwise left alone. When stream is not None
        it is subscribed to and any pending chunks are written to it, oldest first, before this
        method returns. When stream is None the switcher pauses.

        :return: the previously active stream
        """
        with self._lock:
            previous = self._active
            if self._binding is not None:
                self._binding.unbind()
                self._binding = None
            self._active = None
            self._generation += 1
            if stream is None:
                self._detach_pause()
                if previous is not None:
                    self.logger.debug("detached from %s" % previous)
            else:
                self._attach(stream)
            return previous

    def _attach(self, stream):
        self._active = stream
        self._binding = StreamBinding(self, stream, self._generation)
        self._binding.bind()
        self.logger.debug("attached to %s (generation %d)" % (stream, self._generation))
        self._resume_attached()
        if self.config.buffer_when_paused:
            self._drain(stream)

    def _drain(self, stream):
        if self._draining:    # re-entrant write from the stream being drained
            return
        if self._pending:
            self.logger.debug("writing %d pending chunks to %s" % (len(self._pending), stream))
        self._draining = True
        try:
            while self._pending:
                # a chunk stays queued until its write succeeds
                stream.write(self._pending[0])
                self._pending.popleft()
        finally:
            self._draining = False

    def _detach_pause(self):
        self._detached = True
        self.pause()

    def _resume_attached(self):
        if self._detached:
            self._detached = False
            self.resume()

    def _write(self, chunk):
        with self._lock:
            stream = self._active
            if stream is not None:
                self._drain(stream)
                stream.write(chunk)
            elif not self.config.buffer_when_paused:
                self.logger.debug("no active stream, dropping chunk")
            elif len(self._pending) < self.config.max_buffer_size:
                self._pending.append(chunk)
            else:
                self.logger.warning("pending buffer full (%d chunks), dropping chunk" % len(self._pending))
                self.emit_error(BufferOverflowError(chunk, self.config.max_buffer_size))

    def _current(self, generation):
        return generation == self._generation and self._active is not None

    def _stream_data(self, generation, chunk):
        with self._lock:
            if self._current(generation):
                self._resume_attached()
                self.push(chunk)

    def _stream_end(self, generation):
        with self._lock:
            if self._current(generation):
                self.push(None)

    def _stream_error(self, generation, stream, error):
        with self._lock:
            if self._current(generation):
                self.emit_error(ForwardedStreamError(stream, error))
