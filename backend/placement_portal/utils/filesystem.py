from pathlib import Path
from placement_portal.config import settings


def ensure_data_dirs(data_path: Path | None = None) -> Path:
    path = data_path or settings.data_path
    path.mkdir(parents=True, exist_ok=True)
    (path / "uploads").mkdir(exist_ok=True)
    return path


def ensure_student_upload_dir(student_id: str, uploads_dir: Path | None = None) -> Path:
    path = uploads_dir or settings.uploads_dir
    student_dir = path / student_id
    student_dir.mkdir(parents=True, exist_ok=True)
    return student_dir


def sanitize_filename(name: str) -> str:
    keep = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
    return "".join(c if c in keep else "_" for c in name)
