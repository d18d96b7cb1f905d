"""Pre-upload image compression with Pillow."""

import asyncio
import io
import logging
from pathlib import PurePosixPath

from PIL import Image, ImageOps

from ..models.photo import ImageFile
from ..utils.config import CompressionConfig
from ..utils.errors import PhotoProcessingError

logger = logging.getLogger(__name__)

MIN_JPEG_QUALITY = 40
QUALITY_STEP = 10


class ImageCompressor:
    """
    Reduce camera photos (typically 5-10 MB) to an upload-ready JPEG.
    
    Files already within ``max_size_mb`` are returned unchanged. Larger files
    are EXIF-rotated, downscaled to fit ``max_dimension`` on the longest
    side and re-encoded as JPEG, lowering quality step by step until the
    result fits or the quality floor is reached.
    """
    
    def __init__(
        self,
        max_size_mb: float = 1.0,
        max_dimension: int = 1920,
        jpeg_quality: int = 80
    ):
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)
        self.max_dimension = max_dimension
        self.jpeg_quality = jpeg_quality
    
    @classmethod
    def from_config(cls, config: CompressionConfig) -> "ImageCompressor":
        return cls(
            max_size_mb=config.max_size_mb,
            max_dimension=config.max_dimension,
            jpeg_quality=config.jpeg_quality,
        )
    
    async def compress(self, file: ImageFile) -> ImageFile:
        """
        Compress an image off the event loop.
        
        Raises:
            PhotoProcessingError: If the image cannot be decoded or encoded
        """
        return await asyncio.to_thread(self.compress_sync, file)
    
    def compress_sync(self, file: ImageFile) -> ImageFile:
        if file.size <= self.max_size_bytes:
            logger.debug(f"Skipping compression for {file.filename}: {file.size} bytes")
            return file
        
        try:
            with Image.open(io.BytesIO(file.data)) as source:
                image = ImageOps.exif_transpose(source)
                image.thumbnail((self.max_dimension, self.max_dimension))
                if image.mode != "RGB":
                    image = image.convert("RGB")
                
                quality = self.jpeg_quality
                data = self._encode(image, quality)
                while len(data) > self.max_size_bytes and quality - QUALITY_STEP >= MIN_JPEG_QUALITY:
                    quality -= QUALITY_STEP
                    data = self._encode(image, quality)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise PhotoProcessingError.compression_failed(filename=file.filename, error=e) from e
        
        logger.info(
            f"Compressed {file.filename}: {file.size} -> {len(data)} bytes "
            f"(quality={quality}, size={image.width}x{image.height})"
        )
        return ImageFile(
            filename=f"{PurePosixPath(file.filename).stem or 'photo'}.jpg",
            content_type="image/jpeg",
            data=data,
        )
    
    @staticmethod
    def _encode(image: Image.Image, quality: int) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, "JPEG", quality=quality, optimize=True)
        return buffer.getvalue()
