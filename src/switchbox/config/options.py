from switchbox.support.mixins import CommonEqualityMixin, StringerMixin

DEFAULT_BUFFER_WHEN_PAUSED = False
DEFAULT_MAX_BUFFER_SIZE = 100


class SwitcherConfig(CommonEqualityMixin, StringerMixin):
    """
    The options recognized by a switcher.

    :param buffer_when_paused: when True, chunks written while no stream is attached are queued
        rather than dropped.
    :param max_buffer_size: the number of queued chunks at which further writes are reported as
        a buffer overflow.
    """

    # alternative spellings accepted by from_mapping()
    _aliases = {
        'bufferWhenPaused': 'buffer_when_paused',
        'maxBufferSize': 'max_buffer_size',
    }

    def __init__(self, buffer_when_paused=DEFAULT_BUFFER_WHEN_PAUSED, max_buffer_size=DEFAULT_MAX_BUFFER_SIZE):
        self.buffer_when_paused = buffer_when_paused
        self.max_buffer_size = max_buffer_size

    @classmethod
    def from_mapping(cls, mapping):
        """
        builds a config from a mapping of option names. Unrecognized names are ignored, and options
        given as None keep their defaults.
        """
        config = cls()
        for key, value in mapping.items():
            key = cls._aliases.get(key, key)
            if key in config.__dict__ and value is not None:
                setattr(config, key, value)
        config.max_buffer_size = int(config.max_buffer_size)
        return config

    @classmethod
    def coerce(cls, config):
        """ converts None, a mapping or a SwitcherConfig to a SwitcherConfig """
        if config is None:
            return cls()
        if isinstance(config, SwitcherConfig):
            return config
        return cls.from_mapping(config)
