"""Tests for the worklist-based tree walker."""

import asyncio

import pytest

from code_summarizer.domain.exceptions import (
    InvalidArgumentError,
    RemoteProtocolError,
    RemoteUnavailableError,
)
from code_summarizer.domain.value_objects import RepositoryCoordinate
from code_summarizer.services.priority_filter import is_priority
from code_summarizer.services.tree_walker import TreeWalker, parse_listing
from fakes import FakeRepoHost, entry, file_payload

COORD = RepositoryCoordinate(owner="octo", repo="hello")


@pytest.fixture
def small_tree():
    return {
        "": [
            entry("a.txt", "file"),
            entry("docs", "dir"),
            entry("sub", "submodule"),
            entry("sub2", "dir"),
        ],
        "docs": [entry("docs/readme.md", "file")],
        "sub2": [entry("sub2/b.txt", "file")],
    }


def _walk(responses, predicate=None, root="", delays=None, concurrency=8):
    host = FakeRepoHost(responses, delays=delays)
    walker = TreeWalker(host, concurrency=concurrency)
    return asyncio.run(walker.list_files(COORD, root=root, predicate=predicate)), host


def test_priority_walk_of_small_tree(small_tree):
    files, host = _walk(small_tree, predicate=is_priority)
    assert files == ["docs/readme.md"]
    assert "sub" not in host.calls


def test_unfiltered_walk_is_depth_first_pre_order(small_tree):
    files, _ = _walk(small_tree)
    assert files == ["a.txt", "docs/readme.md", "sub2/b.txt"]


def test_order_follows_listing_not_completion():
    tree = {
        "": [entry("x", "dir"), entry("top.md", "file"), entry("y", "dir")],
        "x": [entry("x/deep", "dir"), entry("x/1.md", "file")],
        "x/deep": [entry("x/deep/2.md", "file")],
        "y": [entry("y/3.md", "file")],
    }
    delays = {"x": 0.02, "x/deep": 0.01}
    files, _ = _walk(tree, delays=delays)
    assert files == ["x/deep/2.md", "x/1.md", "top.md", "y/3.md"]


def test_sibling_directories_are_listed_concurrently():
    tree = {
        "": [entry(f"d{i}", "dir") for i in range(5)],
        **{f"d{i}": [entry(f"d{i}/f.md", "file")] for i in range(5)},
    }
    delays = {f"d{i}": 0.05 for i in range(5)}

    async def run():
        host = FakeRepoHost(tree, delays=delays)
        loop = asyncio.get_running_loop()
        start = loop.time()
        files = await TreeWalker(host, concurrency=5).list_files(COORD)
        return files, loop.time() - start

    files, elapsed = asyncio.run(run())
    assert files == [f"d{i}/f.md" for i in range(5)]
    assert elapsed < 0.2


def test_walk_from_subdirectory(small_tree):
    files, host = _walk(small_tree, root="sub2")
    assert files == ["sub2/b.txt"]
    assert host.calls == ["sub2"]


def test_unknown_kinds_are_skipped():
    tree = {"": [entry("link", "symlink"), entry("weird", "blob"), entry("ok.md", "file")]}
    files, _ = _walk(tree)
    assert files == ["ok.md"]


def test_object_instead_of_listing_fails(small_tree):
    small_tree["sub2"] = file_payload("sub2", "not a directory")
    with pytest.raises(RemoteProtocolError, match="array"):
        _walk(small_tree)


def test_root_object_fails_instead_of_returning_empty():
    with pytest.raises(RemoteProtocolError):
        _walk({"": file_payload("README.md", "hi")})


def test_transport_failure_aborts_whole_walk(small_tree):
    small_tree["docs"] = RemoteUnavailableError(500, "GitHub API Error: Server Error")
    with pytest.raises(RemoteUnavailableError):
        _walk(small_tree)


def test_empty_repository_lists_nothing():
    files, _ = _walk({"": []})
    assert files == []


def test_parse_listing_rejects_malformed_entries():
    with pytest.raises(RemoteProtocolError, match="malformed"):
        parse_listing("", [{"type": "file"}])


@pytest.mark.parametrize("root", ["..", "docs/../..", "./docs"])
def test_dot_segment_root_fails_before_remote_call(root):
    host = FakeRepoHost({})
    with pytest.raises(InvalidArgumentError):
        asyncio.run(TreeWalker(host).list_files(COORD, root=root))
    assert host.calls == []


def test_symlinks_are_skipped_with_warning(caplog):
    tree = {"": [entry("link", "symlink"), entry("ok.md", "file")]}
    with caplog.at_level("WARNING"):
        files, _ = _walk(tree)
    assert files == ["ok.md"]
    assert "Skipping symlink: link" in caplog.text


def test_failed_listing_cancels_sibling_listings():
    cancelled = []

    class SlowHost(FakeRepoHost):
        async def get_contents(self, coordinate, path):
            if path == "slow":
                try:
                    await asyncio.sleep(5)
                except asyncio.CancelledError:
                    cancelled.append(path)
                    raise
            return await super().get_contents(coordinate, path)

    tree = {
        "": [entry("slow", "dir"), entry("bad", "dir")],
        "bad": RemoteUnavailableError(500, "GitHub API Error: Server Error"),
    }

    async def run():
        with pytest.raises(RemoteUnavailableError):
            await TreeWalker(SlowHost(tree)).list_files(COORD)
        await asyncio.sleep(0.01)
        assert cancelled == ["slow"]

    asyncio.run(run())
