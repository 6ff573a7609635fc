"""Tests for the dulwich-backed GitObjects store."""

import pytest
from dulwich.objects import Commit as GitCommit
from dulwich.objects import Tag, Tree
from dulwich.repo import Repo

from revdist import GitObjects, ResolutionError, StoreIOError, create, object_store


class GitHistory:
    """Writes commits straight into a repository's object store."""

    def __init__(self, repo: Repo) -> None:
        self.repo = repo
        self.tree = Tree()
        repo.object_store.add_object(self.tree)
        self.ids: dict[str, str] = {}

    def commit(self, name: str, *parents: str) -> str:
        c = GitCommit()
        c.tree = self.tree.id
        c.parents = [self.ids[p].encode("ascii") for p in parents]
        c.author = c.committer = b"Test <test@example.com>"
        c.author_time = c.commit_time = 1700000000 + len(self.ids)
        c.author_timezone = c.commit_timezone = 0
        c.message = name.encode("utf-8")
        self.repo.object_store.add_object(c)
        self.ids[name] = c.id.decode("ascii")
        return self.ids[name]

    def branch(self, name: str, commit: str) -> None:
        self.repo.refs[b"refs/heads/" + name.encode()] = self.ids[commit].encode()

    def tag(self, name: str, sha: str) -> None:
        t = Tag()
        t.object = (GitCommit, sha.encode("ascii"))
        t.name = name.encode("utf-8")
        t.tagger = b"Test <test@example.com>"
        t.tag_time = 1700000000
        t.tag_timezone = 0
        t.message = b"release"
        self.repo.object_store.add_object(t)
        self.repo.refs[b"refs/tags/" + t.name] = t.id


@pytest.fixture
def history(tmp_path):
    repo = Repo.init(str(tmp_path))
    repo.refs.set_symbolic_ref(b"HEAD", b"refs/heads/master")
    h = GitHistory(repo)
    # A <- B <- C, A <- D, M = merge(C, D); E unrelated root
    h.commit("A")
    h.commit("B", "A")
    h.commit("C", "B")
    h.commit("D", "A")
    h.commit("M", "C", "D")
    h.commit("E")
    h.branch("master", "M")
    h.tag("v1.0", h.ids["B"])
    yield h
    repo.close()


class TestGitObjectsResolve:
    def test_resolve_by_id(self, history):
        store = GitObjects(history.repo)
        commit = store.resolve(history.ids["M"])
        assert commit.id == history.ids["M"]
        assert commit.parents == (history.ids["C"], history.ids["D"])

    def test_root_has_no_parents(self, history):
        assert GitObjects(history.repo).resolve(history.ids["A"]).is_root

    def test_resolve_head(self, history):
        assert GitObjects(history.repo).resolve("HEAD").id == history.ids["M"]

    def test_resolve_branch_short_name(self, history):
        assert GitObjects(history.repo).resolve("master").id == history.ids["M"]

    def test_annotated_tag_peeled(self, history):
        store = GitObjects(history.repo)
        assert store.resolve("refs/tags/v1.0").id == history.ids["B"]
        assert store.resolve("v1.0").id == history.ids["B"]

    def test_missing_object(self, history):
        with pytest.raises(ResolutionError, match="no such object"):
            GitObjects(history.repo).resolve("f" * 40)

    def test_tree_is_not_a_commit(self, history):
        with pytest.raises(ResolutionError, match="not a commit"):
            GitObjects(history.repo).resolve(history.tree.id.decode("ascii"))

    def test_contains(self, history):
        store = GitObjects(history.repo)
        assert history.ids["A"] in store
        assert "f" * 40 not in store
        assert history.tree.id.decode("ascii") not in store
        assert "HEAD" not in store

    def test_io_failure_wrapped(self):
        class BrokenRepo:
            def __getitem__(self, name):
                raise OSError("disk on fire")

        with pytest.raises(StoreIOError) as exc_info:
            GitObjects(BrokenRepo()).resolve("HEAD")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_dangling_tag(self, history):
        history.tag("v9", "f" * 40)
        with pytest.raises(ResolutionError, match="dangling tag"):
            GitObjects(history.repo).resolve("v9")

    def test_contains_io_failure_wrapped(self):
        class BrokenObjects:
            def __getitem__(self, name):
                raise OSError("disk on fire")

        class BrokenRepo:
            object_store = BrokenObjects()

        with pytest.raises(StoreIOError):
            GitObjects(BrokenRepo()).__contains__("a" * 40)


class TestGitObjectsOpen:
    def test_open(self, history):
        store = GitObjects.open(history.repo.path)
        assert store.resolve("HEAD").id == history.ids["M"]
        store.close()

    def test_open_not_a_repository(self, tmp_path):
        with pytest.raises(ResolutionError, match="not a git repository"):
            GitObjects.open(str(tmp_path))


class TestGitDistances:
    def test_first_parent(self, history):
        calc = create("HEAD", GitObjects(history.repo))
        assert calc.distance_to(history.ids["A"]) == 3
        assert calc.distance_to(history.ids["D"]) == 1
        assert calc.distance_to(history.ids["E"]) is None

    def test_breadth(self, history):
        calc = create("HEAD", GitObjects(history.repo), strategy="breadth")
        assert calc.distance_to(history.ids["A"]) == 2

    def test_from_tag(self, history):
        store = object_store(storage="git", path=history.repo.path, cached=True)
        calc = create("v1.0", store, 5)
        assert calc.distance_to(history.ids["A"]) == 1
        assert calc.distance_to(history.ids["C"]) is None
        store.store.close()
