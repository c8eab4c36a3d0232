"""Tests for the markdown content repository."""

import frontmatter

from core.file_system import MarkdownContentRepository


class TestListContentRecords:

    def test_loads_pages_in_path_order(self, repository):
        records = repository.list_content_records()
        assert [r.id for r in records] == [1, 2, 3]
        assert [r.title for r in records] == ["Home", "About", "Contact"]
        assert records[1].original_url == "http://www.example.org/about"

    def test_body_is_the_content_field(self, repository):
        home = repository.list_content_records()[0]
        assert '<a href="/about#team">' in home.get_field("content")
        assert home.get_field("title") == "Home"
        assert home.get_field("missing") == ""

    def test_pages_without_id_are_skipped(self, repository, site_dir, capsys):
        (site_dir / "content" / "04-orphan.md").write_text("---\ntitle: Orphan\n---\nHi\n", encoding="utf-8")
        records = repository.list_content_records()
        assert len(records) == 3
        assert "Skipping 04-orphan.md" in capsys.readouterr().out

    def test_missing_content_dir(self, tmp_path, capsys):
        repository = MarkdownContentRepository(tmp_path / "nope")
        assert repository.list_content_records() == []
        assert "Content directory not found" in capsys.readouterr().out


class TestAssets:

    def test_lists_manifest_entries(self, repository):
        assets = repository.list_asset_records()
        assert [a.id for a in assets] == [7, 8]
        assert assets[0].original_url == "http://www.example.org/files/logo.gif"
        assert assets[0].relative_link == "/assets/logo.gif"

    def test_resolve_existing_asset(self, repository):
        assert repository.resolve_asset_by_id(7).filename == "logo.gif"

    def test_deleted_file_does_not_resolve(self, repository):
        assert repository.resolve_asset_by_id(8) is None

    def test_unknown_id_does_not_resolve(self, repository):
        assert repository.resolve_asset_by_id(99) is None

    def test_no_manifest(self, site_dir):
        repository = MarkdownContentRepository(site_dir / "content")
        assert repository.list_asset_records() == []
        assert repository.resolve_asset_by_id(7) is None


class TestSaveRecord:

    def test_saves_changed_fields(self, repository):
        record = repository.list_content_records()[2]
        record.fields["content"] = "Rewritten.\n"
        assert repository.save_record(record) is True

        post = frontmatter.load(str(record.path))
        assert post.content == "Rewritten."
        assert post.metadata["id"] == 3
        assert "draft" not in post.metadata

    def test_publish_clears_draft(self, repository, site_dir, page_writer):
        path = page_writer(site_dir / "content", "05-draft.md", 5, "Draft", "http://www.example.org/draft",
                          "Body\n", extra="draft: true")
        record = [r for r in repository.list_content_records() if r.id == 5][0]
        assert record.draft is True

        repository.save_record(record, publish=True)

        assert frontmatter.load(str(path)).metadata["draft"] is False
        assert record.draft is False
