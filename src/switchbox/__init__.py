"""


Stream Switching

- Duplex stream: an endpoint that accepts written chunks and notifies subscribers of the chunks it
  produces through data, end and error events. Duplex and PassThrough in switchbox.stream.base.
- Switcher: a duplex stream that is wired to at most one backing (active) stream at a time.
  Writes go to the active stream; data, end and errors from the active stream come out of the switcher.
- switch(): replaces the active stream. The previous stream is unsubscribed from and otherwise left
  alone - it is not owned by the switcher. Switching to None detaches and pauses the switcher.
- pending buffer: when buffer_when_paused is set, chunks written while detached are queued, up to
  max_buffer_size, and written to the next stream attached before anything written afterwards.
  A write to a full buffer is reported as a BufferOverflowError error event and the chunk is dropped.
- bindings: each attachment subscribes a fresh StreamBinding tagged with a generation number.
  Notifications from a binding whose generation is no longer current are ignored, so a stream that
  has been switched away from can never leak data, end or errors into the switcher.
- configuration: SwitcherConfig, loaded from layered configobj files by switchbox.config.config.

Typical use is failover between transports:

    switcher = Switcher(primary, {'buffer_when_paused': True})
    ...
    switcher.switch(None)        # primary lost, writes are queued
    switcher.switch(secondary)   # queued writes are replayed to secondary

"""
