"""HTML rendering for the index page.

Everything here is pure string building; the router supplies the file list.
"""
import html
from typing import Iterable, Optional
from urllib.parse import quote

from minidrive.files.schemas import FileKind, get_extension, get_file_kind

UPLOADS_PREFIX = "/uploads/"


def file_url(relative_path: str) -> str:
    """URL under which a stored file is downloaded."""
    return UPLOADS_PREFIX + quote(relative_path, safe="/")


def render_preview(relative_path: str, extension: Optional[str] = None) -> str:
    """Render the preview card for one stored file.

    Args:
        relative_path: Path relative to the storage root.
        extension: Extension to dispatch on; derived from the path if omitted.

    Returns:
        An HTML fragment: inline image, inline video, embedded PDF frame,
        or a download link.
    """
    if extension is None:
        extension = get_extension(relative_path)
    url = html.escape(file_url(relative_path), quote=True)
    name = html.escape(relative_path)
    kind = get_file_kind(relative_path, extension)

    if kind is FileKind.IMAGE:
        return f'<div><img src="{url}" style="max-width:300px;"><p>{name}</p></div>'
    if kind is FileKind.VIDEO:
        return f'<div><video src="{url}" controls style="max-width:300px;"></video><p>{name}</p></div>'
    if kind is FileKind.PDF:
        return f'<div><iframe src="{url}" width="300" height="400"></iframe><p>{name}</p></div>'
    return f'<div><a href="{url}" target="_blank">Download {name}</a></div>'


INDEX_TEMPLATE = '''<!DOCTYPE html>
<html>
<head>
  <title>Mini Drive</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <style>
    body { font-family: sans-serif; margin: 20px; }
    form { margin-bottom: 20px; }
    .file-preview { display: grid; grid-template-columns: repeat(auto-fill, minmax(320px, 1fr)); gap: 20px; }
    .file-preview div { border: 1px solid #ccc; padding: 10px; border-radius: 8px; background: #f9f9f9; }
    .empty { color: #888; }
    video, img, iframe { max-width: 100%; border-radius: 4px; }
  </style>
</head>
<body>
  <h2>My Mini Drive</h2>
  <form id="fileForm" enctype="multipart/form-data" method="POST">
    <label>File: <input type="file" name="file" required></label>
    <button type="submit">Upload file</button>
  </form>
  <form id="folderForm" enctype="multipart/form-data" method="POST">
    <label>Folder: <input type="file" name="files" webkitdirectory directory multiple required></label>
    <button type="submit">Upload folder</button>
  </form>
  <p id="result"></p>
  <div class="file-preview">
    __PREVIEWS__
  </div>

  <script>
    async function submitUpload(e) {
      e.preventDefault();
      const input = e.target.querySelector('input[type=file]');
      const formData = new FormData();
      for (const file of input.files) {
        // Folder uploads keep their relative path as the filename.
        formData.append(input.name, file, file.webkitRelativePath || file.name);
      }
      const res = await fetch("/", { method: "POST", body: formData });
      const text = await res.text();
      document.getElementById('result').textContent = text;
      if (res.ok) {
        setTimeout(() => location.reload(), 1000);
      }
    }
    document.getElementById('fileForm').onsubmit = submitUpload;
    document.getElementById('folderForm').onsubmit = submitUpload;
  </script>
</body>
</html>
'''


def render_index(files: Iterable[str]) -> str:
    """Render the full index page for the given stored files."""
    previews = "".join(render_preview(path) for path in files)
    if not previews:
        previews = '<p class="empty">No files uploaded yet.</p>'
    return INDEX_TEMPLATE.replace("__PREVIEWS__", previews)
