import yaml
from pathlib import Path

from models.content import ContentSource, ImportSchema

# --- Core Configuration Loading ---

CONFIG_DIR = Path(__file__).parent

def load_yaml_config(filename):
    """Loads a YAML file from the config directory."""
    with open(CONFIG_DIR / filename, 'r') as f:
        return yaml.safe_load(f)

LINK_REWRITING = load_yaml_config('link_rewriting.yaml')

# --- Rewriting rules ---
NON_HTTP_URI_SCHEMES = LINK_REWRITING.get('NON_HTTP_URI_SCHEMES', [])
IGNORE_MARKER_PATTERN = LINK_REWRITING.get('IGNORE_MARKER_PATTERN', r'(\[sitetree|assets)')
CONTENT_REFERENCE_FORMAT = LINK_REWRITING.get('CONTENT_REFERENCE_FORMAT', '[sitetree_link,id={id}]{fragment}')

# --- REPORTING ---
LOG_FILE = Path(LINK_REWRITING.get('LOG_FILE', './logs/import-log.txt'))

# --- CONTENT SOURCES ---
CONTENT_SOURCES = {str(k): v for k, v in (LINK_REWRITING.get('CONTENT_SOURCES') or {}).items()}


def get_content_source(source_id, sources=None):
    """
    Builds a ContentSource from the configured entry with the given ID.
    Returns None if no such source is configured.
    """
    sources = CONTENT_SOURCES if sources is None else sources
    data = sources.get(str(source_id))
    if not data:
        return None

    schemas = [
        ImportSchema(url_pattern=s.get('url_pattern', '.*'), fields=list(s.get('fields', [])))
        for s in data.get('schemas', [])
    ]
    manifest = data.get('assets_manifest')
    return ContentSource(
        id=str(source_id),
        name=data.get('name', f"Source {source_id}"),
        base_url=data.get('base_url', ''),
        content_dir=Path(data['content_dir']),
        assets_manifest=Path(manifest) if manifest else None,
        assets_url=data.get('assets_url', '/assets/'),
        url_processor=data.get('url_processor'),
        schemas=schemas,
    )
