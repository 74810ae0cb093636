"""Test doubles shared by the app test suites."""
import threading

from assets.cdn import CdnError, UploadResult


class FakeCdnClient:
    """
    In-memory stand-in for the CDN client. Point
    ``PORTFOLIOHUB_CDN_CLIENT`` at this class; calls are recorded on the
    class so tests can inspect them after the request finished.
    """

    uploads = []
    destroyed = []
    fail = False
    _lock = threading.Lock()

    @classmethod
    def from_settings(cls):
        return cls()

    @classmethod
    def reset(cls):
        cls.uploads = []
        cls.destroyed = []
        cls.fail = False

    def upload(self, data, folder, filename='upload', transformation=''):
        if self.fail:
            raise CdnError('Image service upload failed')
        stem = filename.rsplit('.', 1)[0]
        public_id = f'{folder}/{stem}'
        with self._lock:
            self.uploads.append({
                'folder': folder,
                'filename': filename,
                'transformation': transformation,
                'size': len(data),
            })
        return UploadResult(
            url=f'https://cdn.example.test/{public_id}.jpg', public_id=public_id, width=600, height=400
        )

    def destroy(self, public_id):
        if self.fail:
            raise CdnError('Image service destroy failed')
        self.destroyed.append(public_id)
        return True
