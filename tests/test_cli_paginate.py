"""CLI integration tests for `sitepager paginate`."""

from __future__ import annotations

import json
import os
from pathlib import Path

from click.testing import CliRunner

from sitepager.cli import cli
from sitepager.collection.frontmatter import split_front_matter


def _env_with_home(tmp_path: Path) -> dict[str, str]:
    """Return environment variables pointing HOME to a temp directory.

    Args:
        tmp_path: Temporary directory provided by pytest.

    Returns:
        dict[str, str]: Environment mapping with HOME set.
    """
    env = dict(os.environ)
    env["HOME"] = str(tmp_path / "home")
    return env


def _site(tmp_path: Path, posts: int = 5) -> Path:
    """Create a small site source tree with dated blog posts.

    Args:
        tmp_path: Temporary directory provided by pytest.
        posts: Number of posts to create.

    Returns:
        Path: Root of the site source tree.
    """
    root = tmp_path / "site"
    (root / "blog").mkdir(parents=True)
    for day in range(1, posts + 1):
        (root / "blog" / f"post-{day}.md").write_text(
            f"---\ntitle: Post {day}\ndate: 2024-05-0{day}\n---\nBody {day}\n",
            encoding="utf-8",
        )
    (root / "blog.md").write_text("---\ntitle: Blog\n---\n", encoding="utf-8")
    (root / "about.md").write_text("---\ntitle: About\n---\nAbout\n", encoding="utf-8")
    return root


def _front_matter(path: Path) -> dict:
    fields, _ = split_front_matter(path.read_text(encoding="utf-8"))
    return fields


def test_cli_paginate_writes_output(tmp_path: Path) -> None:
    """Ensure `sitepager paginate` writes relocated posts and index pages.

    Args:
        tmp_path: Temporary directory provided by pytest.
    """
    root = _site(tmp_path)
    output = tmp_path / "build"
    data = tmp_path / "data"
    data.mkdir()
    (data / "site.json").write_text(json.dumps({"title": "Example"}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["paginate", str(root), "--per-page", "2", "--output", str(output), "--data", str(data)],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0, result.output
    assert "pages=3" in result.output

    assert (output / "blog" / "post-3" / "index.md").exists()
    assert not (output / "blog" / "post-3.md").exists()
    assert (output / "about.md").exists()

    second = _front_matter(output / "blog" / "2" / "index.html")
    assert second["pagination"]["num"] == 2
    assert second["pagination"]["next"] == "/blog/3/"
    assert second["layout"] == "blog-index.njk"
    assert second["site"] == {"title": "Example"}

    landing = _front_matter(output / "blog.md")
    assert landing["pagination"]["previous"] is None
    assert [entry["path"] for entry in landing["pageFiles"]] == ["/blog/post-5/", "/blog/post-4/"]


def test_cli_paginate_json_output(tmp_path: Path) -> None:
    """Ensure JSON mode reports moves and generated pages.

    Args:
        tmp_path: Temporary directory provided by pytest.
    """
    root = _site(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["paginate", str(root), "--per-page", "2", "--flat", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["total_pages"] == 3
    assert payload["moved"]["blog/post-1.md"] == "blog/post-1/index.md"
    assert payload["created"] == ["blog/2/index.html", "blog/3/index.html"]
    assert payload["updated"] == "blog.md"
    assert payload["output"] is None


def test_cli_paginate_dry_run_writes_nothing(tmp_path: Path) -> None:
    """Ensure dry runs leave the output directory untouched.

    Args:
        tmp_path: Temporary directory provided by pytest.
    """
    root = _site(tmp_path)
    output = tmp_path / "build"

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["paginate", str(root), "--output", str(output), "--dry-run"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output
    assert not output.exists()
    assert (root / "blog" / "post-1.md").exists()


def test_cli_paginate_summary_mode(tmp_path: Path) -> None:
    """Ensure summary mode suppresses the plan table.

    Args:
        tmp_path: Temporary directory provided by pytest.
    """
    root = _site(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["paginate", str(root), "--summary"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0, result.output
    assert "Pagination plan" not in result.output
    assert "pages=1" in result.output


def test_cli_paginate_without_matching_directory(tmp_path: Path) -> None:
    """Ensure an empty selection succeeds without changes.

    Args:
        tmp_path: Temporary directory provided by pytest.
    """
    root = _site(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["paginate", str(root), "--directory", "news"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0, result.output
    assert "pages=0" in result.output


def test_cli_paginate_rejects_invalid_page_size(tmp_path: Path) -> None:
    """Ensure invalid options surface as configuration errors.

    Args:
        tmp_path: Temporary directory provided by pytest.
    """
    root = _site(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["paginate", str(root), "--per-page", "0", "--json"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["error"]["code"] == "config_error"
