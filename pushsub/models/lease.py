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
A book of the leases the hub granted, kept from handshake events.

Nothing here is persisted. Renewing is left to the caller, typically by
subscribing again to the topics returned by ``Leases.due``.
"""
import threading
import time

from ..events import IDenied, ISubscribed, IUnsubscribed

import logging
logger = logging.getLogger(__name__)


class Leases(object):

    def __init__(self):
        self.expiries = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self.expiries)

    def __contains__(self, topic):
        return topic in self.expiries

    def listen(self, subscriber):
        """Records the lease events raised by `subscriber`."""
        for iface in (ISubscribed, IUnsubscribed, IDenied):
            subscriber.add_listener(self.record, iface)

    def record(self, event):
        with self._lock:
            if ISubscribed.providedBy(event):
                self.expiries[event.topic] = event.lease
                logger.debug('Lease for %s expires at %s',
                             event.topic, event.lease)
            else:
                self.expiries.pop(event.topic, None)

    def expiry(self, topic):
        """Unix time the topic's lease ends, or None if it has no lease."""
        with self._lock:
            return self.expiries.get(topic)

    def due(self, within, now=None):
        """Topics whose lease ends in the next `within` seconds."""
        if now is None:
            now = time.time()
        with self._lock:
            return sorted(
                topic for (topic, lease) in self.expiries.items()
                if lease - now <= within
            )
