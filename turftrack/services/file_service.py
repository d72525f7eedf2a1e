from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from turftrack.errors import AppError

ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "webp", "gif"}


class FileService:
    @staticmethod
    def _is_allowed(filename):
        return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS

    @classmethod
    def save_image(cls, storage: FileStorage, upload_root: str):
        """Store an uploaded image under ``upload_root/yyyy/mm/dd`` and return its relative path."""
        if not storage or not storage.filename:
            raise AppError("An image file is required.", 400, field="image")

        filename = secure_filename(storage.filename)
        if not filename or not cls._is_allowed(filename):
            raise AppError("Unsupported image format.", 400, field="image")

        # Check the bytes, not just the extension.
        try:
            img = Image.open(storage.stream)
            img.verify()
            storage.stream.seek(0)
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise AppError("Invalid image file.", 400, field="image") from exc

        dated_folder = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        folder = Path(upload_root) / dated_folder
        folder.mkdir(parents=True, exist_ok=True)

        extension = filename.rsplit(".", 1)[1].lower()
        unique_filename = f"{uuid4().hex}.{extension}"
        storage.save(folder / unique_filename)

        return str(Path(upload_root).name + "/" + dated_folder + "/" + unique_filename)
