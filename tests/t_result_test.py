import unittest
from concurrent.futures import InvalidStateError
from unittest import mock

from mongopaginator import PagedResult, ResultChannel
from mongopaginator.util import parse_server_version, is_server_version_supported


class ResultChannelTest(unittest.TestCase):
    """ Test delivery of outcomes """

    def test_resolve(self):
        page = PagedResult(total=10, limit=2, page=1, data=[{}, {}])

        # With a callback
        callback = mock.Mock()
        channel = ResultChannel(callback)
        channel.resolve(page)
        callback.assert_called_once_with(None, page)
        self.assertIs(channel.result(), page)

        # Without a callback
        channel = ResultChannel()
        channel.resolve(page)
        self.assertIs(channel.result(), page)

    def test_reject(self):
        error = ValueError('oops')

        callback = mock.Mock()
        channel = ResultChannel(callback)
        channel.reject(error)
        callback.assert_called_once_with(error, None)
        with self.assertRaises(ValueError) as e:
            channel.result()
        self.assertIs(e.exception, error)

    def test_delivered_once(self):
        callback = mock.Mock()
        channel = ResultChannel(callback)
        channel.resolve(1)

        with self.assertRaises(InvalidStateError):
            channel.resolve(2)
        with self.assertRaises(InvalidStateError):
            channel.reject(ValueError())

        callback.assert_called_once_with(None, 1)
        self.assertEqual(channel.result(), 1)

    def test_failing_callback(self):
        """ A failing callback does not change the outcome """
        callback = mock.Mock(side_effect=KeyError('callback failed'))

        # === Test: success
        channel = ResultChannel(callback)
        with self.assertLogs('mongopaginator.result', 'ERROR') as logs:
            channel.resolve(1)
        self.assertIn('callback', logs.output[0])
        self.assertEqual(channel.result(), 1)

        # === Test: failure
        error = ValueError('oops')
        channel = ResultChannel(callback)
        with self.assertLogs('mongopaginator.result', 'ERROR'):
            channel.reject(error)
        with self.assertRaises(ValueError) as e:
            channel.result()
        self.assertIs(e.exception, error)
        callback.assert_called_with(error, None)

    def test_paged_result(self):
        page = PagedResult(10, 2, 3, [])
        self.assertEqual((page.total, page.limit, page.page, page.data), (10, 2, 3, []))
        self.assertEqual(page._asdict(), dict(total=10, limit=2, page=3, data=[]))


class ServerVersionTest(unittest.TestCase):
    def test_parse(self):
        self.assertEqual(parse_server_version('3.4.10'), (3, 4, 10))
        self.assertEqual(parse_server_version('4.0'), (4, 0, 0))
        self.assertEqual(parse_server_version('4.0.0-rc1'), (4, 0, 0))
        self.assertIsNone(parse_server_version('garbage'))
        self.assertIsNone(parse_server_version(None))

    def test_supported(self):
        self.assertTrue(is_server_version_supported('3.4.0', (3, 4)))
        self.assertTrue(is_server_version_supported('4.2.1', (3, 4)))
        self.assertFalse(is_server_version_supported('3.2.22', (3, 4)))
        self.assertFalse(is_server_version_supported('', (3, 4)))
