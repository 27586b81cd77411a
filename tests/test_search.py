import pytest
from myblog.core.exceptions import NotFoundError
from myblog.services.posts import PostRepository
from myblog.services.search import SearchEngine

@pytest.fixture
def posts(session, categories):
    """Posts that each match "cat" through a different field, plus one that does not"""
    repository = PostRepository(session)
    return {
        "category": repository.create("Filed", "Under a category", category="Category"),
        "tag": repository.create("Strings", "Joining text", tags=["concatenate"]),
        "title": repository.create("Catalog intro", "First entry"),
        "content": repository.create("Pets", "My CAT sleeps all day"),
        "none": repository.create("Dogs", "Barking", category="Tech", tags=["animals"]),
    }

class TestSearchEngine:
    def test_matches_any_field(self, session, posts):
        """测试标题、内容、分类、标签任一匹配即返回"""
        found = SearchEngine(session).search("cat")
        expected = [posts[key].id for key in ("category", "tag", "title", "content")]
        assert [post.id for post in found] == expected

    def test_case_insensitive(self, session, posts):
        found = SearchEngine(session).search("CATALOG")
        assert [post.id for post in found] == [posts["title"].id]

    def test_no_duplicates_when_several_fields_match(self, session, categories):
        repository = PostRepository(session)
        post = repository.create("Cat", "cat", category="Category", tags=["cats", "catnip"])

        found = SearchEngine(session).search("cat")
        assert [p.id for p in found] == [post.id]

    def test_no_match_raises(self, session, posts):
        """测试没有匹配结果（应该失败）"""
        with pytest.raises(NotFoundError):
            SearchEngine(session).search("zebra")

    def test_empty_term_matches_everything(self, session, posts):
        found = SearchEngine(session).search("")
        assert len(found) == len(posts)

    def test_wildcards_match_literally(self, session, categories):
        repository = PostRepository(session)
        repository.create("Discount", "Save 100% today")
        repository.create("Plain", "Nothing special")

        found = SearchEngine(session).search("0%")
        assert [post.title for post in found] == ["Discount"]
        with pytest.raises(NotFoundError):
            SearchEngine(session).search("_x_")

    def test_results_carry_tags(self, session, posts):
        found = SearchEngine(session).search("concat")
        assert [tag.name for tag in found[0].tags] == ["concatenate"]

class TestSearchEndpoint:
    def test_search_by_term(self, client):
        """测试通过 term 搜索文章"""
        client.post("/posts", json={"title": "Catalog intro", "content": "First"})
        client.post("/posts", json={"title": "Strings", "content": "Text", "tags": ["concatenate"]})
        client.post("/posts", json={"title": "Filed", "content": "Away", "category": "Category"})
        client.post("/posts", json={"title": "Dogs", "content": "Barking", "category": "Tech"})

        response = client.get("/posts", params={"term": "cat"})
        assert response.status_code == 200
        titles = [post["title"] for post in response.json()]
        assert titles == ["Catalog intro", "Strings", "Filed"]

    def test_search_without_results(self, client):
        client.post("/posts", json={"title": "Dogs", "content": "Barking"})
        response = client.get("/posts", params={"term": "zebra"})
        assert response.status_code == 404

    def test_empty_term_returns_all(self, client):
        client.post("/posts", json={"title": "One", "content": "1"})
        client.post("/posts", json={"title": "Two", "content": "2"})
        response = client.get("/posts?term=")
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_deleted_post_no_longer_found_by_tag(self, client):
        """测试删除文章后无法再通过标签搜索到"""
        kept = client.post("/posts", json={"title": "Kept", "content": "x", "tags": ["shared"]}).json()
        gone = client.post("/posts", json={"title": "Gone", "content": "y", "tags": ["shared"]}).json()

        client.delete(f"/posts/{gone['id']}")

        response = client.get("/posts", params={"term": "shared"})
        assert [post["id"] for post in response.json()] == [kept["id"]]
