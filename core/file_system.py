import frontmatter
import yaml
from pathlib import Path
from typing import Dict, List, Optional

from models.content import AssetRecord, ContentRecord, ContentSource

def save_markdown_file(post: frontmatter.Post, filepath: Path):
    """
    Safely saves a frontmatter.Post object to a file.
    """
    try:
        new_file_content = frontmatter.dumps(post)
        filepath.parent.mkdir(parents=True, exist_ok=True) # Ensure directory exists
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(new_file_content)
        print(f"  -> ✅ Saved: {filepath.name}")
        return True
    except Exception as e:
        print(f"  -> ❌ ERROR: Could not save file {filepath.name}: {e}")
        return False

class MarkdownContentRepository:
    """
    Reads and writes the imported content of a single content source.

    Pages are markdown files with YAML frontmatter under `content_dir`, each
    carrying an `id`, a `title` and the `legacy_url` it was imported from.
    Files are listed in a YAML manifest (`id`, `legacy_url`, `filename`) and
    live in the manifest's directory.
    """

    def __init__(self, content_dir: Path, assets_manifest: Optional[Path] = None, assets_url: str = "/assets/"):
        self.content_dir = Path(content_dir)
        self.assets_manifest = Path(assets_manifest) if assets_manifest else None
        self.assets_url = assets_url
        self._assets_by_id = None

    @classmethod
    def for_source(cls, source: ContentSource) -> "MarkdownContentRepository":
        return cls(source.content_dir, source.assets_manifest, source.assets_url)

    @property
    def assets_dir(self) -> Optional[Path]:
        return self.assets_manifest.parent if self.assets_manifest else None

    def list_content_records(self) -> List[ContentRecord]:
        """Loads every page in the content directory, in a stable (sorted) order."""
        records = []
        if not self.content_dir.is_dir():
            print(f"  -> WARNING: Content directory not found at '{self.content_dir}'.")
            return records

        for md_path in sorted(self.content_dir.glob('**/*.md*')):
            if not md_path.is_file():
                continue
            try:
                with open(md_path, 'r', encoding='utf-8-sig') as f:
                    post = frontmatter.load(f)
            except Exception as e:
                print(f"  [ERROR] Could not read {md_path.name}: {e}")
                continue

            if post.metadata.get('id') is None:
                print(f"  [WARNING] Skipping {md_path.name}: no 'id' in frontmatter.")
                continue

            fields = {k: v for k, v in post.metadata.items() if isinstance(v, str)}
            fields['content'] = post.content
            records.append(ContentRecord(
                id=int(post.metadata['id']),
                original_url=post.metadata.get('legacy_url') or '',
                title=post.metadata.get('title') or md_path.stem,
                fields=fields,
                path=md_path,
                draft=bool(post.metadata.get('draft', True)),
            ))
        return records

    def list_asset_records(self) -> List[AssetRecord]:
        """Loads the asset manifest, in the order the files are listed."""
        if not self.assets_manifest or not self.assets_manifest.is_file():
            return []

        with open(self.assets_manifest, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or []
        if isinstance(data, dict):
            data = data.get('files', [])

        records = []
        for item in data:
            filename = str(item.get('filename', '')).lstrip('/')
            records.append(AssetRecord(
                id=int(item['id']),
                original_url=item.get('legacy_url') or '',
                filename=filename,
                relative_link=f"{self.assets_url.rstrip('/')}/{filename}",
            ))
        return records

    def _asset_index(self) -> Dict[int, AssetRecord]:
        if self._assets_by_id is None:
            self._assets_by_id = {asset.id: asset for asset in self.list_asset_records()}
        return self._assets_by_id

    def resolve_asset_by_id(self, asset_id: int) -> Optional[AssetRecord]:
        """
        Returns the asset with this ID, or None if it is not in the manifest
        or its file has been deleted.
        """
        asset = self._asset_index().get(asset_id)
        if asset is None:
            return None
        if not (self.assets_dir / asset.filename).is_file():
            return None
        return asset

    def save_record(self, record: ContentRecord, publish: bool = False) -> bool:
        """
        Writes the record's fields back to its markdown file. Publishing also
        clears the draft flag.
        """
        with open(record.path, 'r', encoding='utf-8-sig') as f:
            post = frontmatter.load(f)

        for name, value in record.fields.items():
            if name == 'content':
                post.content = value
            elif post.metadata.get(name) != value:
                post.metadata[name] = value

        if publish:
            post.metadata['draft'] = False
            record.draft = False

        return save_markdown_file(post, record.path)
