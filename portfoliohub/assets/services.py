# assets/services.py
"""
Image uploads for portfolio sections.

Files are checked locally, pushed to the CDN through an explicitly passed
client in fixed-size parallel batches, and the resulting URL is stored in
the portfolio's ``customData``. Addressing follows the editor: a list
section is targeted with ``itemIndex`` (+ ``imageKey``, default "image"),
an object section with ``imageKey`` alone.
"""
import copy
import logging
import re
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings

from portfoliohub.errors import Forbidden, NotFound, ValidationFailed
from .transforms import transformation_for

logger = logging.getLogger(__name__)

IMAGE_TYPES = re.compile(r'jpeg|jpg|png|gif|webp')
DEFAULT_IMAGE_KEY = 'image'
SECTION_KEY = re.compile(r'[A-Za-z0-9_-]+')


def validate_images(files, max_bytes=None, max_files=None):
    max_bytes = max_bytes or settings.PORTFOLIOHUB_UPLOAD_MAX_BYTES
    max_files = max_files or settings.PORTFOLIOHUB_UPLOAD_MAX_FILES
    if not files:
        raise ValidationFailed('No files uploaded')
    if len(files) > max_files:
        raise ValidationFailed(f'At most {max_files} files can be uploaded at once')
    for upload in files:
        extension = upload.name.rsplit('.', 1)[-1].lower() if '.' in upload.name else ''
        if not (IMAGE_TYPES.search(extension) and IMAGE_TYPES.search(upload.content_type or '')):
            raise ValidationFailed('Only image files are allowed!', invalid=[upload.name])
        if upload.size > max_bytes:
            raise ValidationFailed(
                f'{upload.name} is larger than {max_bytes // (1024 * 1024)}MB', invalid=[upload.name]
            )


def upload_images(client, files, folder, transformation='', batch_size=None):
    """Upload ``files`` concurrently, at most ``batch_size`` at a time, keeping their order."""
    batch_size = batch_size or getattr(settings, 'PORTFOLIOHUB_UPLOAD_BATCH_SIZE', 4)
    payloads = [(upload.name, upload.read()) for upload in files]

    def push(item):
        name, data = item
        result = client.upload(data, folder=folder, filename=name, transformation=transformation)
        logger.info('Uploaded %s to %s as %s', name, folder, result.public_id)
        return result.to_document(name)

    with ThreadPoolExecutor(max_workers=max(1, min(batch_size, len(payloads)))) as pool:
        return list(pool.map(push, payloads))


def parse_index(value):
    if value is None or value == '':
        return None
    try:
        index = int(value)
    except (TypeError, ValueError):
        raise ValidationFailed('itemIndex must be an integer')
    if index < 0:
        raise ValidationFailed('itemIndex must not be negative')
    return index


def attach_image(custom_data, section, url, image_key=None, item_index=None):
    """Return a copy of ``custom_data`` with ``url`` stored at the addressed field."""
    data = copy.deepcopy(custom_data or {})
    if data.get(section) in (None, ''):
        data[section] = [] if item_index is not None else {}
    target = data[section]

    if item_index is not None:
        if not isinstance(target, list):
            raise ValidationFailed(
                f"Section '{section}' data in customData is not an array. Cannot use itemIndex."
            )
        if item_index >= len(target) or not isinstance(target[item_index], dict):
            raise ValidationFailed(
                f'Cannot attach image. Item at index {item_index} not found in {section} array.'
            )
        target[item_index][image_key or DEFAULT_IMAGE_KEY] = url
    elif image_key:
        if not isinstance(target, dict):
            raise ValidationFailed(f"Section '{section}' data is not an object. Cannot use imageKey.")
        target[image_key] = url
    else:
        raise ValidationFailed(
            f'Unsupported image attachment for section: {section}. Missing imageKey/itemIndex.'
        )
    return data


def set_image_detail(custom_data, section, image_key, value, item_index=None):
    data = copy.deepcopy(custom_data or {})
    target = data.get(section)
    if item_index is not None:
        target = target[item_index] if isinstance(target, list) and item_index < len(target) else None
    if not isinstance(target, dict) or not image_key:
        raise NotFound('Image target or key not found in section data')
    target[image_key] = value
    return data, target


def clear_image(custom_data, section, image_key=None, item_index=None):
    """Blank the addressed image field; unknown targets are left alone."""
    data = copy.deepcopy(custom_data or {})
    target = data.get(section)
    if item_index is not None:
        if isinstance(target, list) and item_index < len(target) and isinstance(target[item_index], dict):
            target[item_index][image_key or DEFAULT_IMAGE_KEY] = ''
            return data, True
    elif image_key:
        if isinstance(target, dict) and image_key in target:
            target[image_key] = ''
            return data, True
    logger.warning('No image field to clear in section %s', section)
    return data, False


def portfolio_root(portfolio):
    root = getattr(settings, 'PORTFOLIOHUB_CDN_ROOT_FOLDER', 'portfoliohub')
    return f'{root}/portfolios/{portfolio.owner_id}/{portfolio.pk}'


def portfolio_folder(portfolio, section):
    return f'{portfolio_root(portfolio)}/{section}'


def upload_section_images(client, portfolio, files, section, image_key=None, item_index=None):
    if not section or not SECTION_KEY.fullmatch(section):
        raise ValidationFailed('A valid section is required')
    validate_images(files)
    # check addressing before spending an upload on it
    attach_image(portfolio.custom_data, section, '', image_key, item_index)
    uploaded = upload_images(
        client, files, portfolio_folder(portfolio, section), transformation_for(section)
    )
    first = uploaded[0]
    portfolio.custom_data = attach_image(portfolio.custom_data, section, first['url'], image_key, item_index)
    portfolio.save(update_fields=['custom_data', 'last_edited_at', 'updated_at'])
    return {
        'message': 'Image uploaded successfully',
        'uploadedUrl': first['url'],
        'imageDetails': first,
        'images': uploaded,
        'section': section,
        'imageKey': image_key,
        'itemIndex': item_index,
    }


def update_image_details(portfolio, section, image_key, value, item_index=None):
    portfolio.custom_data, target = set_image_detail(
        portfolio.custom_data, section, image_key, value, item_index
    )
    portfolio.save(update_fields=['custom_data', 'last_edited_at', 'updated_at'])
    return {'message': 'Image details updated successfully', 'data': target}


def delete_portfolio_image(client, portfolio, public_id, section, image_key=None, item_index=None):
    if not public_id.startswith(portfolio_root(portfolio) + '/') or '..' in public_id.split('/'):
        logger.warning('Refused to delete %s through portfolio %s', public_id, portfolio.pk)
        raise Forbidden('Image does not belong to this portfolio')
    client.destroy(public_id)
    logger.info('Deleted image %s', public_id)
    portfolio.custom_data, cleared = clear_image(portfolio.custom_data, section, image_key, item_index)
    if cleared:
        portfolio.save(update_fields=['custom_data', 'last_edited_at', 'updated_at'])
    return {'message': 'Image deleted successfully', 'cleared': cleared}
