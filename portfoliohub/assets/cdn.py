# assets/cdn.py
"""
Object storage / CDN client.

``CloudinaryClient`` wraps the Cloudinary SDK. Credentials travel with every
call instead of through ``cloudinary.config()``, so nothing is configured at
import time: a client is built from settings by ``get_cdn_client`` and handed
to whatever needs to upload or delete assets.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from django.conf import settings
from django.utils.module_loading import import_string

from portfoliohub.errors import UpstreamFailure

logger = logging.getLogger(__name__)


class CdnError(UpstreamFailure):
    default_message = 'Image service request failed'


@dataclass(frozen=True)
class UploadResult:
    url: str
    public_id: str
    width: Optional[int] = None
    height: Optional[int] = None

    def to_document(self, filename=''):
        stem = filename.rsplit('.', 1)[0] if filename else ''
        return {
            'id': self.public_id.split('/')[-1],
            'url': self.url,
            'publicId': self.public_id,
            'width': self.width,
            'height': self.height,
            'alt': stem,
            'caption': '',
            'title': stem,
        }


class CloudinaryClient:

    def __init__(self, cloud_name, api_key, api_secret, timeout=30):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout

    @classmethod
    def from_settings(cls):
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            timeout=getattr(settings, 'PORTFOLIOHUB_CDN_TIMEOUT', 30),
        )

    def _credentials(self):
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise CdnError('Image service is not configured')
        return {
            'cloud_name': self.cloud_name,
            'api_key': self.api_key,
            'api_secret': self.api_secret,
            'timeout': self.timeout,
        }

    def upload(self, data: bytes, folder: str, filename: str = 'upload', transformation: str = '') -> UploadResult:
        options = {'folder': folder, 'filename': filename, 'resource_type': 'image'}
        if transformation:
            options['transformation'] = transformation
        options.update(self._credentials())
        try:
            result = cloudinary.uploader.upload(data, **options)
        except CloudinaryError as exc:
            logger.error('Cloudinary upload of %s failed: %s', filename, exc)
            raise CdnError('Image service upload failed') from exc
        return UploadResult(
            url=result['secure_url'],
            public_id=result['public_id'],
            width=result.get('width'),
            height=result.get('height'),
        )

    def destroy(self, public_id: str) -> bool:
        credentials = self._credentials()
        try:
            result = cloudinary.uploader.destroy(public_id, **credentials)
        except CloudinaryError as exc:
            logger.error('Cloudinary destroy of %s failed: %s', public_id, exc)
            raise CdnError('Image service destroy failed') from exc
        return result.get('result') == 'ok'


def get_cdn_client():
    client_class = import_string(settings.PORTFOLIOHUB_CDN_CLIENT)
    return client_class.from_settings()
