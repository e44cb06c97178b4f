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
Events raised by a subscriber.

Each event class is marked with an interface so handlers can be registered
for one kind of event (``IFeedReceived``) or for a family of them
(``ISubscriptionEvent``), either through ``Subscriber.add_listener`` or
through Pyramid's ``config.add_subscriber``.
"""
from zope.interface import Attribute, Interface, implementer


class ISubscriptionEvent(Interface):
    """An event about the state of a topic subscription."""
    topic = Attribute('The topic the event is about')
    hub = Attribute('The hub URL, when known')


class ISubscribed(ISubscriptionEvent):
    """The hub verified a subscribe request."""
    lease = Attribute('Absolute expiry of the lease, in unix seconds')


class IUnsubscribed(ISubscriptionEvent):
    """The hub verified an unsubscribe request."""
    lease = Attribute('Absolute expiry reported by the hub, in unix seconds')


class IDenied(ISubscriptionEvent):
    """The hub refused a (un)subscription, or could not be asked."""
    error = Attribute('The exception explaining a failed hub request')


class IFeedReceived(Interface):
    """The hub delivered content with a valid signature."""
    topic = Attribute('The topic the content belongs to')
    hub = Attribute('The hub URL, when known')
    callback = Attribute('The URL the hub posted to')
    feed = Attribute('The raw notification body, as bytes')
    headers = Attribute('The notification request headers')


class IListening(Interface):
    """The callback server is bound and about to serve."""


class IServerError(Interface):
    """The callback server failed."""
    error = Attribute('The exception raised by the server')
    message = Attribute('A description naming what failed')


class SubscriptionEvent(object):

    def __init__(self, topic, hub=None):
        self.topic = topic
        self.hub = hub

    def __repr__(self):
        return "<%s %s>" % (self.__class__.__name__, self.topic)


class _Verified(SubscriptionEvent):

    def __init__(self, topic, hub=None, lease=0):
        super(_Verified, self).__init__(topic, hub)
        self.lease = lease


@implementer(ISubscribed)
class Subscribed(_Verified):
    mode = 'subscribe'


@implementer(IUnsubscribed)
class Unsubscribed(_Verified):
    mode = 'unsubscribe'


@implementer(IDenied)
class Denied(SubscriptionEvent):
    mode = 'denied'

    def __init__(self, topic, hub=None, error=None):
        super(Denied, self).__init__(topic, hub)
        self.error = error


@implementer(IFeedReceived)
class FeedReceived(object):

    def __init__(self, topic, hub, callback, feed, headers):
        self.topic = topic
        self.hub = hub
        self.callback = callback
        self.feed = feed
        self.headers = headers

    def __repr__(self):
        return "<FeedReceived %s (%s bytes)>" % (self.topic, len(self.feed))


@implementer(IListening)
class Listening(object):

    def __init__(self, host, port):
        self.host = host
        self.port = port


@implementer(IServerError)
class ServerError(object):

    def __init__(self, error, message=None):
        self.error = error
        self.message = message or str(error)


# Handshake modes and the events they produce
VERIFIED_EVENTS = {
    'subscribe': Subscribed,
    'unsubscribe': Unsubscribed,
}
