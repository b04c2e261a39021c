class FakeBlob:
    def __init__(self, name, data=None, error=None):
        self.name = name
        self.data = data
        self.error = error
        self.content_type = None

    def download_as_text(self):
        if self.error:
            raise self.error
        return self.data

    def upload_from_string(self, data, content_type=None):
        self.data = data
        self.content_type = content_type


class FakeBucket:
    def __init__(self):
        self.blobs = {}

    def blob(self, name):
        return self.blobs.setdefault(name, FakeBlob(name))

    def list_blobs(self, prefix=None):
        return [b for name, b in self.blobs.items() if name.startswith(prefix or '')]


class FakeClient:
    def __init__(self):
        self.buckets = {}

    def bucket(self, name):
        return self.buckets.setdefault(name, FakeBucket())
