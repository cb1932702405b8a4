import unittest

from hamcrest import assert_that, is_, equal_to

from switchbox.config.options import SwitcherConfig


class SwitcherConfigTest(unittest.TestCase):

    def test_defaults(self):
        sut = SwitcherConfig()
        assert_that(sut.buffer_when_paused, is_(False))
        assert_that(sut.max_buffer_size, is_(100))

    def test_from_mapping_snake_case(self):
        sut = SwitcherConfig.from_mapping({'buffer_when_paused': True, 'max_buffer_size': 2})
        assert_that(sut, is_(equal_to(SwitcherConfig(True, 2))))

    def test_from_mapping_camel_case(self):
        sut = SwitcherConfig.from_mapping({'bufferWhenPaused': True, 'maxBufferSize': 5})
        assert_that(sut, is_(equal_to(SwitcherConfig(True, 5))))

    def test_from_mapping_ignores_unknown(self):
        sut = SwitcherConfig.from_mapping({'highWaterMark': 16, '_aliases': None})
        assert_that(sut, is_(equal_to(SwitcherConfig())))
        assert_that(SwitcherConfig._aliases['maxBufferSize'], is_('max_buffer_size'))

    def test_from_mapping_none_keeps_default(self):
        sut = SwitcherConfig.from_mapping({'bufferWhenPaused': None, 'maxBufferSize': None})
        assert_that(sut, is_(equal_to(SwitcherConfig())))

    def test_from_mapping_converts_buffer_size(self):
        sut = SwitcherConfig.from_mapping({'maxBufferSize': '2'})
        assert_that(sut.max_buffer_size, is_(2))

    def test_coerce(self):
        config = SwitcherConfig(True)
        assert_that(SwitcherConfig.coerce(config), is_(config))
        assert_that(SwitcherConfig.coerce(None), is_(equal_to(SwitcherConfig())))
        assert_that(SwitcherConfig.coerce({'maxBufferSize': 3}), is_(equal_to(SwitcherConfig(max_buffer_size=3))))

    def test_str(self):
        assert_that(str(SwitcherConfig()), is_("SwitcherConfig:{'buffer_when_paused': 'False', "
                                               "'max_buffer_size': '100'}"))
