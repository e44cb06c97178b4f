from unittest import TestCase

from mock import Mock, patch
from pyramid.registry import Registry

from ..models.subscriber import ISubscriber, Subscriber
from ..scripts import subscribe_topic, unsubscribe_topic

from .mocks import CALLBACK, CLIENT_ID, HUB, SECRET, TOPIC, MockResponse


class ScriptTests(TestCase):

    def setUp(self):
        registry = Registry('pushsub')
        self.subscriber = Subscriber(CALLBACK, CLIENT_ID, SECRET, hub=HUB,
                                     registry=registry)
        registry.registerUtility(self.subscriber, ISubscriber)
        self.env = {'registry': registry, 'closer': Mock()}

        patchers = [
            patch('pushsub.scripts.bootstrap', return_value=self.env),
            patch('pushsub.scripts.setup_logging'),
            patch('sys.argv', ['pushsub_subscribe', 'etc/paster.ini', TOPIC]),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self):
        self.subscriber = None
        self.env = None

    def test_subscribe(self):
        with patch('requests.post') as post:
            post.return_value = MockResponse(status_code=202)
            result = subscribe_topic()
        self.assertEqual(result, 0)
        self.assertEqual(post.call_args[1]['data']['hub.mode'], 'subscribe')
        self.env['closer'].assert_called_once_with()

    def test_unsubscribe(self):
        with patch('requests.post') as post:
            post.return_value = MockResponse(status_code=204)
            result = unsubscribe_topic()
        self.assertEqual(result, 0)
        self.assertEqual(post.call_args[1]['data']['hub.mode'], 'unsubscribe')

    def test_refused(self):
        with patch('requests.post', new_callable=MockResponse,
                   status_code=403, content='bad client id'):
            result = subscribe_topic()
        self.assertEqual(result, 1)
        self.env['closer'].assert_called_once_with()

    def test_missing_arguments(self):
        with patch('sys.argv', ['pushsub_subscribe', 'etc/paster.ini']):
            self.assertEqual(subscribe_topic(), 2)
