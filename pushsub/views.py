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

import time

from pyramid.httpexceptions import exception_response
from pyramid.response import Response

from .events import Denied, FeedReceived, VERIFIED_EVENTS
from .models.subscriber import ISubscriber
from .signature import verify as verify_signature
from .utils import MAX_BODY_SIZE, RequestBodyTooLarge
from .utils import error_response, read_body

import logging
logger = logging.getLogger(__name__)


def callback(context, request):
    """The endpoint the hub calls back on.

    GET requests are verification handshakes, POST requests are content
    notifications.
    """
    subscriber = request.registry.getUtility(ISubscriber)
    if request.method == 'GET':
        return verify(subscriber, request)
    if request.method == 'POST':
        return notify(subscriber, request)
    return error_response(405, 'Method Not Allowed',
                          headers=[('Allow', 'GET, POST')])


def verify(subscriber, request):
    try:
        params = request.GET
        topic = params.get('hub.topic', '')
        mode = params.get('hub.mode', '')
        challenge = params.get('hub.challenge')
        hub = params.get('hub')
        lease_seconds = params.get('hub.lease_seconds')
    except UnicodeDecodeError:
        return error_response(400, 'Bad Request')

    if not topic or not mode:
        return error_response(400, 'Bad Request')

    if mode == 'denied':
        logger.info('Hub denied subscription to %s', topic)
        response = Response(text=challenge or 'ok', content_type='text/plain')
        subscriber.notify(Denied(topic, hub))
        return response

    if mode not in VERIFIED_EVENTS:
        return error_response(403, 'Forbidden')

    try:
        lease_seconds = int(float(lease_seconds or 0))
    except (ValueError, OverflowError):
        return error_response(400, 'Bad Request')

    lease = int(round(time.time())) + lease_seconds
    logger.info('Hub verified %s for %s', mode, topic)
    response = Response(text=challenge or '', content_type='text/plain')
    subscriber.notify(VERIFIED_EVENTS[mode](topic, hub, lease))
    return response


def notify(subscriber, request):
    try:
        topic = request.GET.get('topic', '')
        hub = request.GET.get('hub')
    except UnicodeDecodeError:
        return error_response(400, 'Bad Request')
    signature = request.headers.get('X-Hub-Signature')

    if not topic:
        return error_response(400, 'Bad Request')

    if not signature:
        return error_response(403, 'Forbidden')

    try:
        body = read_body(request, MAX_BODY_SIZE)
    except RequestBodyTooLarge as e:
        logger.warning('Refusing notification for %s: %s bytes or more',
                       topic, e)
        return error_response(413, 'Request Entity Too Large')

    if not verify_signature(subscriber.secret_for(topic), body, signature):
        # Accepted but not processed; a stale secret is the usual cause
        logger.debug('Discarding notification for %s: bad signature', topic)
        return Response(status=202, content_type='text/plain')

    logger.info('Received %s bytes for topic %s', len(body), topic)
    subscriber.notify(FeedReceived(
        topic=topic,
        hub=hub,
        callback=request.url,
        feed=body,
        headers=dict(request.headers)
    ))
    return exception_response(204)
