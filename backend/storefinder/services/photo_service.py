# 사진 업로드 처리
# - image/* 콘텐츠 타입만 허용
# - 메모리에 모두 읽은 뒤 최대 가로 800px로 축소, uuid 파일명으로 업로드 디렉토리에 저장
# - 저장 포맷/확장자는 클라이언트가 보낸 콘텐츠 타입이 아니라 Pillow가 읽은 실제 포맷 기준

import io
import logging
import os
import uuid
from typing import Optional

from fastapi import UploadFile
from PIL import Image
from starlette.concurrency import run_in_threadpool

from ..core.config import settings
from ..core.constants import PHOTO_MAX_WIDTH
from ..core.exceptions import FormValidationError

logger = logging.getLogger(__name__)

# 그대로 저장할 수 있는 포맷 -> 확장자, 나머지(ICO, BMP, TIFF 등)는 PNG로 저장
SAVE_FORMATS = {"JPEG": "jpg", "PNG": "png", "GIF": "gif", "WEBP": "webp"}
FALLBACK_FORMAT = "PNG"

JPEG_MODES = ("L", "RGB", "CMYK")
PNG_MODES = ("1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16")

NOT_ALLOWED = "That filetype isn't allowed!"


def is_photo(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith("image/")


def save_format(detected: Optional[str]) -> str:
    return detected if detected in SAVE_FORMATS else FALLBACK_FORMAT


def photo_filename(fmt: str) -> str:
    return f"{uuid.uuid4()}.{SAVE_FORMATS[fmt]}"


def fit_mode(image: Image.Image, fmt: str) -> Image.Image:
    # JPEG는 알파 채널을 못 씀, PNG는 CMYK 등을 못 씀
    if fmt == "JPEG" and image.mode not in JPEG_MODES:
        return image.convert("RGB")
    if fmt == "PNG" and image.mode not in PNG_MODES:
        return image.convert("RGBA")
    return image


def resize_and_write(data: bytes, directory: str, max_width: int = PHOTO_MAX_WIDTH) -> str:
    """
    이미지를 디코딩해서 필요하면 축소하고 directory에 저장합니다.

    Returns:
        str: 저장된 파일명

    Raises:
        ValueError / OSError: Pillow가 읽거나 쓸 수 없는 이미지
    """
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        fmt = save_format(image.format)
        if image.width > max_width:
            height = round(image.height * max_width / image.width)
            image = image.resize((max_width, height))
        image = fit_mode(image, fmt)
        filename = photo_filename(fmt)
        image.save(os.path.join(directory, filename), format=fmt)
    return filename


async def save_photo(upload: Optional[UploadFile], values: Optional[dict] = None) -> Optional[str]:
    """
    업로드된 사진을 저장하고 파일명을 반환합니다. 사진이 없으면 None.

    values는 검증 실패 시 폼을 다시 그리기 위한 제출값입니다.
    """
    if upload is None or not upload.filename:
        return None
    if not is_photo(upload.content_type):
        raise FormValidationError([NOT_ALLOWED], values)

    data = await upload.read()
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    # Pillow 작업은 CPU/디스크 작업이므로 이벤트 루프를 막지 않게 스레드풀에서 실행
    try:
        filename = await run_in_threadpool(resize_and_write, data, settings.UPLOAD_DIR)
    except (ValueError, OSError) as e:
        # UnidentifiedImageError도 OSError의 하위 클래스
        logger.warning(f"[PhotoService] 이미지 처리 실패 ({upload.content_type}): {e}")
        raise FormValidationError([NOT_ALLOWED], values)
    logger.info(f"[PhotoService] 사진 저장: {filename}")
    return filename
