class FakeReceiveMessage:
    def __init__(self, messages, journal=None):
        self._messages = list(messages)
        self._journal = journal if journal is not None else []

    async def __call__(self):
        self._journal.append("receive")
        if not self._messages:
            return None
        return self._messages.pop(0)


class FakeSendMessage:
    def __init__(self, journal=None):
        self.sent = []
        self._journal = journal if journal is not None else []

    async def __call__(self, msg):
        self._journal.append("send")
        self.sent.append(msg)
