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
This module provides mock classes for various interactions (mostly HTTP),
as well as shared values for building subscribers in tests.
"""

CALLBACK = 'http://www.example.com/websub'
CLIENT_ID = 'client-id'
SECRET = 'pineapple'
HUB = 'http://hub.example.com/hub'
TOPIC = 'https://api.example.com/users/follows?to_id=1'


class MockResponse(object):
    """Mocks a response object, mostly for Requests.
    """
    def __init__(self, content=None, headers=None, status_code=None):
        self.content = content
        self.headers = headers
        self.status_code = status_code

    @property
    def text(self):
        if self.content is None:
            return ''
        return self.content

    def __call__(self, *args, **kwargs):
        return self


class EventRecorder(object):
    """Collects the events a subscriber raises."""

    def __init__(self, subscriber, *ifaces):
        self.events = []
        for iface in ifaces:
            subscriber.add_listener(self.events.append, iface)

    def __len__(self):
        return len(self.events)

    def __getitem__(self, idx):
        return self.events[idx]
