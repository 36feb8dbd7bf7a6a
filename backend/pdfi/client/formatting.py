PDF_MIME_TYPE = "application/pdf"
ACCEPTED_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp")
ACCEPTED_EXTENSIONS = (".pdf",) + ACCEPTED_IMAGE_EXTENSIONS

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    """Render a byte count like '0 Bytes', '1.5 KB' or '2 MB'."""
    if size <= 0:
        return "0 Bytes"
    k = 1024
    i = 0
    while i < len(_SIZE_UNITS) - 1 and size >= k ** (i + 1):
        i += 1
    value = f"{size / k ** i:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[i]}"


def summary_filename(file_name: str) -> str:
    return f"{file_name.split('.')[0]}_summary.txt"


def rejection_reason(name: str, mime_type: str, size: int, max_size_bytes: int) -> str | None:
    """Return why a picked file cannot be uploaded, or None if it is accepted."""
    extension = "." + name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if mime_type == PDF_MIME_TYPE:
        if extension != ".pdf":
            return f"{name}: PDF files must use the .pdf extension"
    elif mime_type.startswith("image/"):
        if extension not in ACCEPTED_IMAGE_EXTENSIONS:
            return f"{name}: unsupported image extension {extension or '(none)'}"
    else:
        return f"{name}: unsupported file type {mime_type or '(unknown)'}"

    if size > max_size_bytes:
        return f"{name}: file is larger than {format_file_size(max_size_bytes)}"
    return None
