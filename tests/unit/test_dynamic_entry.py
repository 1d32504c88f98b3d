"""Tests for content-type descriptors, dynamic entries and their cache."""

import httpx
import pytest

from contentful_management import Client, ContentTypeDescriptor, DynamicEntry, DynamicEntryCache, FieldDescriptor
from contentful_management.errors import NotFoundError
from contentful_management.resources import ContentType

BLOG_POST = {
    "sys": {"type": "ContentType", "id": "blogPost", "version": 2},
    "name": "Blog Post",
    "displayField": "title",
    "fields": [
        {"id": "title", "name": "Title", "type": "Symbol", "required": True, "localized": True},
        {"id": "publishDate", "name": "Publish date", "type": "Date"},
        {"id": "rating", "name": "Rating", "type": "Number"},
        {"id": "tags", "name": "Tags", "type": "Array", "items": {"type": "Symbol"}},
        {"id": "author", "name": "Author", "type": "Link", "linkType": "Entry"},
    ],
}


def make_entry(fields, locale="en-US"):
    descriptor = ContentTypeDescriptor.from_content_type(BLOG_POST)
    data = {
        "sys": {"type": "Entry", "id": "post1", "contentType": {"sys": {"type": "Link", "id": "blogPost"}}},
        "fields": fields,
    }
    return DynamicEntry(data, descriptor=descriptor, default_locale=locale)


class TestDescriptor:
    @pytest.mark.unit
    def test_from_raw_json(self):
        descriptor = ContentTypeDescriptor.from_content_type(BLOG_POST)

        assert descriptor.id == "blogPost"
        assert descriptor.name == "Blog Post"
        assert descriptor.display_field == "title"
        assert descriptor.field_ids == ["title", "publishDate", "rating", "tags", "author"]
        assert descriptor.fields[0] == FieldDescriptor(
            id="title", name="Title", type="Symbol", localized=True, required=True
        )
        assert descriptor.fields[4].link_type == "Entry"

    @pytest.mark.unit
    def test_from_resource(self):
        assert ContentTypeDescriptor.from_content_type(ContentType(BLOG_POST)).id == "blogPost"

    @pytest.mark.unit
    def test_requires_id(self):
        with pytest.raises(ValueError):
            ContentTypeDescriptor.from_content_type({"sys": {"type": "ContentType"}, "fields": []})

    @pytest.mark.unit
    def test_field_lookup_by_id_or_alias(self):
        descriptor = ContentTypeDescriptor.from_content_type(BLOG_POST)

        assert descriptor.field("publishDate") is descriptor.field("publish_date")
        assert descriptor.field("missing") is None


class TestDynamicEntry:
    @pytest.mark.unit
    def test_attribute_access(self):
        entry = make_entry({"title": {"en-US": "Hello"}, "publishDate": {"en-US": "2024-01-01"}})

        assert entry.title == "Hello"
        assert entry.publishDate == "2024-01-01"
        assert entry.publish_date == "2024-01-01"
        assert entry.rating is None

    @pytest.mark.unit
    def test_unknown_attribute(self):
        entry = make_entry({})

        with pytest.raises(AttributeError):
            entry.nope  # noqa: B018

    @pytest.mark.unit
    def test_locales(self):
        entry = make_entry({"title": {"en-US": "Hello", "de-DE": "Hallo"}})

        assert entry.get("title", "de-DE") == "Hallo"
        assert make_entry({"title": {"en-US": "Hello", "de-DE": "Hallo"}}, locale="de-DE").title == "Hallo"
        assert entry.fields_for("de-DE") == {"title": "Hallo"}

    @pytest.mark.unit
    def test_set(self):
        entry = make_entry({})
        entry.set("publish_date", "2024-02-02")
        entry.set("title", "Hallo", locale="de-DE")

        assert entry.fields == {"publishDate": {"en-US": "2024-02-02"}, "title": {"de-DE": "Hallo"}}

    @pytest.mark.unit
    def test_set_unknown_field(self):
        with pytest.raises(KeyError):
            make_entry({}).set("nope", 1)

    @pytest.mark.unit
    def test_valid_entry(self):
        entry = make_entry(
            {
                "title": {"en-US": "Hello"},
                "rating": {"en-US": 4.5},
                "tags": {"en-US": ["a", "b"]},
                "author": {"en-US": {"sys": {"type": "Link", "linkType": "Entry", "id": "a1"}}},
            }
        )

        assert entry.validate() == []
        assert entry.is_valid

    @pytest.mark.unit
    def test_validation_problems(self):
        entry = make_entry(
            {
                "rating": {"en-US": "five"},
                "tags": {"en-US": ["a", 2]},
                "extra": {"en-US": 1},
            }
        )

        problems = {(problem.field_id, problem.locale): problem.message for problem in entry.validate()}

        assert problems[("rating", "en-US")] == "expected Number, got str"
        assert problems[("tags", "en-US")] == "item 1: expected Symbol, got int"
        assert problems[("extra", None)] == "unknown field"
        assert problems[("title", "en-US")] == "required field is missing"
        assert not entry.is_valid

    @pytest.mark.unit
    def test_booleans_are_not_numbers(self):
        assert FieldDescriptor(id="n", type="Integer").check(True) == "expected Integer, got bool"
        assert FieldDescriptor(id="n", type="Integer").check(3) is None


class TestCache:
    @pytest.mark.unit
    def test_register_and_lookup(self):
        cache = DynamicEntryCache()
        first = ContentTypeDescriptor(id="blogPost", name="first")
        second = ContentTypeDescriptor(id="blogPost", name="second")

        cache.register("blogPost", first)
        assert cache.get("blogPost") is first

        cache.register("blogPost", second)
        assert cache.get("blogPost") is second
        assert cache.lookup("blogPost") is second
        assert len(cache) == 1

    @pytest.mark.unit
    def test_missing_key_is_none(self):
        cache = DynamicEntryCache()

        assert cache.get("nope") is None
        assert cache.get(None) is None
        assert "nope" not in cache

    @pytest.mark.unit
    def test_keys_are_case_sensitive(self):
        cache = DynamicEntryCache()
        cache.register("blogPost", ContentTypeDescriptor(id="blogPost"))

        assert cache.get("blogpost") is None

    @pytest.mark.unit
    def test_update_from_content_types(self):
        cache = DynamicEntryCache()

        registered = cache.update([BLOG_POST, ContentType({"sys": {"id": "author"}, "fields": []})])

        assert registered == ["blogPost", "author"]
        assert sorted(cache) == ["author", "blogPost"]


class TestClientCache:
    @pytest.mark.unit
    def test_explicit_registration(self, make_client, stub_transport):
        client = make_client()
        descriptor = ContentTypeDescriptor.from_content_type(BLOG_POST)

        client.register_dynamic_entry("blogPost", descriptor)
        client.register_dynamic_entry("post", ContentType(BLOG_POST))

        assert client.dynamic_entry_cache.get("blogPost") is descriptor
        assert client.dynamic_entry_cache.get("post").id == "blogPost"
        assert stub_transport.calls == []

    @pytest.mark.unit
    def test_no_preload_without_spaces(self, make_client, stub_transport):
        client = make_client(dynamic_entries=[])

        assert stub_transport.calls == []
        assert len(client.dynamic_entry_cache) == 0

    @pytest.mark.unit
    def test_preload(self, make_client, stub_transport):
        base = "https://api.contentful.com/spaces/space1"
        stub_transport.routes[("GET", base)] = httpx.Response(200, json={"sys": {"type": "Space", "id": "space1"}})
        stub_transport.routes[("GET", f"{base}/content_types")] = httpx.Response(
            200,
            json={
                "sys": {"type": "Array"},
                "total": 2,
                "skip": 0,
                "limit": 1000,
                "items": [
                    {"sys": {"type": "ContentType", "id": "post"}, "fields": [{"id": "title", "type": "Symbol"}]},
                    {"sys": {"type": "ContentType", "id": "author"}, "fields": [{"id": "name", "type": "Symbol"}]},
                ],
            },
        )

        client = make_client(dynamic_entries=["space1"])

        assert sorted(client.dynamic_entry_cache.keys()) == ["author", "post"]
        assert [call["url"] for call in stub_transport.calls] == [base, f"{base}/content_types"]

    @pytest.mark.unit
    def test_preload_pages_through_content_types(self):
        base = "https://api.contentful.com/spaces/space1"
        pages = [
            {
                "sys": {"type": "Array"},
                "total": 2,
                "skip": skip,
                "limit": 1,
                "items": [{"sys": {"type": "ContentType", "id": content_type_id}}],
            }
            for skip, content_type_id in enumerate(["post", "author"])
        ]

        class PagingTransport:
            calls = []

            def send(self, method, url, query, headers, proxy):
                self.calls.append(dict(query))
                if url == base:
                    return httpx.Response(200, json={"sys": {"type": "Space", "id": "space1"}})
                return httpx.Response(200, json=pages[query["skip"]])

        transport = PagingTransport()
        client = Client("token", transport=transport, dynamic_entries=["space1"])

        assert sorted(client.dynamic_entry_cache) == ["author", "post"]
        assert [call.get("skip") for call in transport.calls] == [None, 0, 1]

    @pytest.mark.unit
    def test_preload_single_space_id(self, make_client, stub_transport):
        base = "https://api.contentful.com/spaces/space1"
        stub_transport.routes[("GET", f"{base}/content_types")] = httpx.Response(
            200, json={"sys": {"type": "Array"}, "total": 0, "items": []}
        )

        make_client(dynamic_entries="space1")

        assert [call["url"] for call in stub_transport.calls] == [base, f"{base}/content_types"]

    @pytest.mark.unit
    def test_preload_failure_raises(self, make_client, stub_transport):
        stub_transport.default = httpx.Response(404, json={"sys": {"type": "Error", "id": "NotFound"}})

        with pytest.raises(NotFoundError):
            make_client(dynamic_entries=["missing"])

    @pytest.mark.unit
    def test_fetched_entries_use_cached_descriptor(self, make_client, stub_transport):
        client = make_client()
        client.register_dynamic_entry("blogPost", ContentTypeDescriptor.from_content_type(BLOG_POST))
        stub_transport.default = httpx.Response(
            200,
            json={
                "sys": {"type": "Entry", "id": "post1", "contentType": {"sys": {"type": "Link", "id": "blogPost"}}},
                "fields": {"title": {"en-US": "Hello"}},
            },
        )

        entry = client.entries.find("space1", "post1")

        assert isinstance(entry, DynamicEntry)
        assert entry.title == "Hello"
