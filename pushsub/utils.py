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
Various utility functions.
"""
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from pyramid.httpexceptions import exception_response

import logging
logger = logging.getLogger(__name__)

# 50 * 10 ** 6: the largest notification body we accept
MAX_BODY_SIZE = 50000000

# Size of the reads used to drain a notification body
CHUNK_SIZE = 64 * 1024

ERROR_PAGE = """\
<!DOCTYPE html>
<html>
    <head>
        <meta charset="utf-8"/>
        <title>PushSub - %(code)s %(message)s</title>
    </head>
    <body>
        <h1>PushSub - %(code)s %(message)s</h1>
    </body>
</html>
"""


class RequestBodyTooLarge(Exception):
    """Raised when a request body goes over the allowed size.

    The callback view answers it with a 413.
    """


def is_valid_url(url):
    """Returns True if the URL is valid, False otherwise."""
    split = urlsplit(url)
    if not split.scheme in ('http', 'https'):
        return False

    if not split.netloc:
        return False

    if split.fragment:
        return False

    return True


def build_callback_url(base, topic, hub):
    """Appends the topic and hub to the subscriber's callback URL.

    The hub calls this URL back for both the handshake and the content
    notifications, which is how a notification names its topic.
    """
    scheme, netloc, path, query, fragment = urlsplit(base)
    if not path:
        path = '/'
    params = urlencode([('topic', topic), ('hub', hub)], quote_via=quote)
    if query:
        query = '%s&%s' % (query, params)
    else:
        query = params
    return urlunsplit((scheme, netloc, path, query, fragment))


def error_response(code, message, headers=None):
    """An HTML error page for requests we refuse to handle."""
    body = ERROR_PAGE % {'code': code, 'message': message}
    response = exception_response(
        code,
        body=body.encode('utf-8'),
        content_type='text/html',
        charset='utf-8'
    )
    if headers:
        response.headers.extend(headers)
    return response


def read_body(request, limit=MAX_BODY_SIZE):
    """Reads the whole request body, refusing anything over `limit` bytes.
    """
    length = request.content_length
    if length is not None and length > limit:
        raise RequestBodyTooLarge(length)

    chunks = []
    size = 0
    body_file = request.body_file
    while True:
        chunk = body_file.read(CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > limit:
            raise RequestBodyTooLarge(size)
        chunks.append(chunk)
    return b''.join(chunks)
