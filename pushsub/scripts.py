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

import optparse
import textwrap
import sys

from pyramid.paster import bootstrap, setup_logging

from .events import IDenied
from .models.subscriber import ISubscriber


def _set_subscription(mode, description):
    usage = "%prog config_uri topic"
    parser = optparse.OptionParser(
        usage=usage,
        description=textwrap.dedent(description),
    )

    options, args = parser.parse_args(sys.argv[1:])
    if not len(args) >= 2:
        print("You must provide a configuration file and a topic")
        return 2
    config_uri = args[0]
    topic = args[1]

    setup_logging(config_uri)
    env = bootstrap(config_uri)
    subscriber = env['registry'].getUtility(ISubscriber)

    def denied(event):
        print("Hub refused to %s %s: %s" % (mode, event.topic, event.error))
    subscriber.add_listener(denied, IDenied)

    try:
        accepted = subscriber.set_subscription(mode, topic)
    finally:
        env['closer']()

    if not accepted:
        return 1
    print("Requested %s for %s; the hub will verify through %s" % (
        mode, topic, subscriber.callback))
    return 0


def subscribe_topic():
    description = """
    Asks the hub to subscribe the configured callback to a topic. The
    subscription is active once the hub verifies it, so the callback
    application must be running.

    Arguments:
        config_uri: the pyramid configuration of the subscriber
        topic: the topic URL to subscribe to

    Example usage:
        bin/pushsub_subscribe etc/paster.ini#pushsub https://api.twitch.tv/helix/users/follows?first=1&to_id=1
    """
    return _set_subscription('subscribe', description)


def unsubscribe_topic():
    description = """
    Asks the hub to unsubscribe the configured callback from a topic.

    Arguments:
        config_uri: the pyramid configuration of the subscriber
        topic: the topic URL to unsubscribe from

    Example usage:
        bin/pushsub_unsubscribe etc/paster.ini#pushsub https://api.twitch.tv/helix/users/follows?first=1&to_id=1
    """
    return _set_subscription('unsubscribe', description)
