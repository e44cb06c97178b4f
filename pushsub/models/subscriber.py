"""
Copyright (c) 2013, Regents of the University of California
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

  * Redistributions of source code must retain the above copyright notice,
    this list of conditions and the following disclaimer.

  * Redistributions in binary form must reproduce the above copyright notice,
    this list of conditions and the following disclaimer in the documentation
    and/or other materials provided with the distribution.

  * Neither the name of the University of California nor the names of its
    contributors may be used to endorse or promote products derived from this
    software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND
ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""

"""
The subscriber side of a PubSubHubbub hub.

A Subscriber asks the hub to (un)subscribe topics on its behalf, keeps the
per-topic secrets the hub signs notifications with, and dispatches the
events raised by its callback endpoint.
"""
import errno
import threading

import requests
from pyramid.config import Configurator
from pyramid.exceptions import ConfigurationError
from pyramid.registry import Registry
from requests.exceptions import RequestException
from waitress import create_server
from zope.interface import Interface, implementer

from ..events import Denied, Listening, ServerError
from ..signature import sign
from ..utils import MAX_BODY_SIZE, build_callback_url, is_valid_url
from .lease import Leases

import logging
logger = logging.getLogger(__name__)

DEFAULT_HUB = 'https://api.twitch.tv/helix/webhooks/hub'

# Default duration of a lease.
DEFAULT_LEASE_SECONDS = (10 * 24 * 60 * 60)  # 10 days

# Hub answers meaning the request was accepted for verification
ACCEPTED_STATUSES = (202, 204)

MODES = ('subscribe', 'unsubscribe')


class HubRequestError(Exception):
    """The hub answered a subscription request with an unexpected status.
    """

    def __init__(self, status_code, body=''):
        super(HubRequestError, self).__init__(
            'Invalid response status %s' % status_code
        )
        self.status_code = status_code
        self.body = body


class ISubscriber(Interface):
    """Marker interface for subscriber implementations"""
    pass


@implementer(ISubscriber)
class Subscriber(object):

    def __init__(self, callback, client_id, secret, hub=DEFAULT_HUB,
                 lease_seconds=DEFAULT_LEASE_SECONDS, timeout=None,
                 registry=None):
        if not client_id:
            raise ConfigurationError(
                'A client_id is required to request subscriptions from a hub'
            )
        if not callback:
            raise ConfigurationError(
                'A callback URL is required for the hub to call back'
            )
        if not is_valid_url(callback):
            raise ConfigurationError(
                'Invalid callback URL %s; must be an http(s) URL with no '
                'fragment' % callback
            )
        if not secret:
            raise ConfigurationError(
                'A secret is required to sign and verify notifications'
            )

        self.callback = callback
        self.client_id = client_id
        self.secret = secret
        self.hub = hub
        self.lease_seconds = int(lease_seconds)
        self.timeout = timeout
        if registry is None:
            registry = Registry('pushsub')
        self.registry = registry

        self.secrets = {}
        self._lock = threading.Lock()

    def __repr__(self):
        return "<Subscriber %s>" % self.callback

    @classmethod
    def from_settings(cls, settings, registry=None):
        """Creates a subscriber from `pushsub.*` application settings.
        """
        timeout = settings.get('pushsub.timeout')
        return cls(
            callback=settings.get('pushsub.callback', ''),
            client_id=settings.get('pushsub.client_id', ''),
            secret=settings.get('pushsub.secret', ''),
            hub=settings.get('pushsub.hub') or DEFAULT_HUB,
            lease_seconds=(
                settings.get('pushsub.lease_seconds') or
                DEFAULT_LEASE_SECONDS
            ),
            timeout=float(timeout) if timeout else None,
            registry=registry,
        )

    def subscribe(self, topic):
        return self.set_subscription('subscribe', topic)

    def unsubscribe(self, topic):
        return self.set_subscription('unsubscribe', topic)

    def set_subscription(self, mode, topic):
        """
        Asks the hub to subscribe or unsubscribe a topic.

        Only one request is made. A True result means the hub accepted the
        request; the subscription is active once the hub verifies it
        through the callback, which raises a Subscribed event.

        Returns:
            True if the hub accepted the request, False otherwise. Refusals
            and transport failures also raise a Denied event.
        """
        if mode not in MODES:
            raise ValueError('Invalid mode %r' % mode)

        topic_secret = self.derive_secret(topic)
        with self._lock:
            self.secrets[topic] = topic_secret

        data = {
            'hub.callback': build_callback_url(self.callback, topic, self.hub),
            'hub.mode': mode,
            'hub.topic': topic,
            'hub.lease_seconds': self.lease_seconds,
            'hub.secret': topic_secret,
        }
        headers = {'Client-ID': self.client_id}

        try:
            response = requests.post(
                self.hub,
                data=data,
                headers=headers,
                timeout=self.timeout
            )
        except RequestException as e:
            logger.warning('Could not reach hub %s to %s %s: %s',
                           self.hub, mode, topic, e)
            self.notify(Denied(topic, error=e))
            return False

        if response.status_code not in ACCEPTED_STATUSES:
            error = HubRequestError(response.status_code, response.text or '')
            logger.warning('Hub %s refused to %s %s: %s',
                           self.hub, mode, topic, error)
            self.notify(Denied(topic, error=error))
            return False

        logger.info('Requested %s for topic %s', mode, topic)
        return True

    def derive_secret(self, topic):
        """The secret the hub signs this topic's notifications with."""
        return sign(self.secret, topic)

    def secret_for(self, topic):
        """
        Returns the secret handed to the hub for a topic.

        Topics we have not requested since startup may still hold a lease
        at the hub, so the secret is derived again rather than refused.
        """
        with self._lock:
            topic_secret = self.secrets.get(topic)
            if topic_secret is None:
                topic_secret = self.secrets[topic] = self.derive_secret(topic)
        return topic_secret

    def add_listener(self, handler, iface):
        """Calls `handler(event)` for every event providing `iface`."""
        self.registry.registerHandler(handler, (iface,))

    def notify(self, event):
        self.registry.notify(event)

    def track_leases(self):
        """Keeps a Leases book current from this subscriber's events."""
        leases = Leases()
        leases.listen(self)
        return leases

    def make_app(self, settings=None):
        """Returns a WSGI application serving this subscriber's callback.
        """
        # Imported here, the package imports this module
        from .. import configure_subscriber

        config = Configurator(registry=self.registry)
        config.setup_registry(settings=settings)
        configure_subscriber(config, self)
        return config.make_wsgi_app()

    def listen(self, port, host='0.0.0.0', **kw):
        """
        Serves the callback endpoint with waitress until interrupted.

        Errors binding the port raise a ServerError event instead of an
        exception.
        """
        kw.setdefault('max_request_body_size', MAX_BODY_SIZE)
        app = self.make_app()
        try:
            server = create_server(app, host=host, port=port, **kw)
        except OSError as e:
            code = errno.errorcode.get(e.errno, e.errno)
            message = '[%s] Failed to start on port %s' % (code, port)
            logger.error(message)
            self.notify(ServerError(e, message))
            return

        logger.info('Listening for hub callbacks on %s:%s', host, port)
        self.notify(Listening(host, port))
        try:
            server.run()
        finally:
            server.close()
