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
HMAC-SHA256 signatures for hub secrets and content notifications.

The same primitive is used twice: keyed by the master secret over a topic
name it produces the ``hub.secret`` handed to the hub, and keyed by that
per-topic secret over a notification body it authenticates the content
the hub delivers.
"""
import hashlib
import hmac

# The only scheme we compute; any other label in X-Hub-Signature fails.
SIGNATURE_SCHEME = 'sha256'


def _bytes(value):
    if isinstance(value, bytes):
        return value
    return value.encode('utf-8')


def sign(secret, message):
    """Returns the hex encoded HMAC-SHA256 of `message` keyed by `secret`.
    """
    return hmac.new(_bytes(secret), _bytes(message), hashlib.sha256).hexdigest()


def parse_signature(header):
    """Splits an X-Hub-Signature value into (scheme, digest).

    A value without a scheme label gives a scheme of None.
    """
    scheme, sep, digest = (header or '').partition('=')
    if not sep:
        return None, scheme.strip()
    return scheme.strip().lower(), digest.strip()


def verify(secret, message, header):
    """Checks a notification body against its X-Hub-Signature header.

    Returns True only if the digest matches exactly. The comparison runs
    in constant time.
    """
    scheme, digest = parse_signature(header)
    if scheme is not None and scheme != SIGNATURE_SCHEME:
        return False
    expected = sign(secret, message)
    return hmac.compare_digest(_bytes(expected), _bytes(digest))
