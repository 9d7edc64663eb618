import copy
from pathlib import Path

from api_expect.description.base import Body, Description, Header, Method, Parameter, Resource, Response, Trait
from api_expect.description.reader import read_description
from api_expect.expectations.uri_template import build_uri_template
from api_expect.registry.collections import Registry
from api_expect.registry.loader import load

FIXTURES = Path(__file__).parent / "fixtures"


class TestParameter:
    def test_defaults(self):
        p = Parameter(name="page")
        assert p.example is None
        assert p.optional is True

    def test_scalar_example_coerced_to_str(self):
        assert Parameter(name="page", example=2).example == "2"
        assert Parameter(name="flag", example=True).example == "true"


class TestHeader:
    def test_create_required_header(self):
        h = Header(name="Content-Type", optional=False, example="application/json")
        assert h.optional is False
        assert h.example == "application/json"


class TestBody:
    def test_structured_example_dumped_as_json(self):
        body = Body(media_type="application/json", example={"id": 1})
        assert body.example == '{"id": 1}'


class TestParentLinks:
    def test_graph_links_parents(self):
        body = Body(media_type="application/json")
        response = Response(status=200, bodies=[body])
        method = Method(verb="get", responses=[response])
        resource = Resource(path="/posts", methods=[method])

        assert body.parent is response
        assert response.parent is method
        assert method.parent is resource

    def test_links_set_from_dict_input(self):
        resource = Resource.model_validate({
            "path": "/posts",
            "methods": [{"verb": "GET", "responses": [{"status": 200, "bodies": [{"media_type": "text/plain"}]}]}],
        })
        method = resource.methods[0]
        assert method.parent is resource
        assert method.responses[0].bodies[0].parent is method.responses[0]

    def test_parent_not_serialized(self):
        method = Method(verb="GET")
        Resource(path="/posts", methods=[method])
        assert "parent" not in method.model_dump()
        assert "_parent" not in method.model_dump()


class TestMethod:
    def test_verb_upper_cased(self):
        assert Method(verb="patch").verb == "PATCH"

    def test_trait_lookup(self):
        paged = Trait(name="paged")
        method = Method(verb="GET", traits=[paged])
        assert method.trait("paged") is paged
        assert method.trait("missing") is None


class TestDescription:
    def test_trait_names_distinct_in_first_seen_order(self):
        description = Description(resources=[
            Resource(path="/a", methods=[
                Method(verb="GET", traits=[Trait(name="secured"), Trait(name="paged")]),
            ]),
            Resource(path="/b", methods=[
                Method(verb="GET", traits=[Trait(name="paged"), Trait(name="searchable")]),
            ]),
        ])
        assert description.trait_names() == ["secured", "paged", "searchable"]

    def test_empty_description(self):
        assert Description().resources == []
        assert Description().trait_names() == []


class TestGraphEquality:
    def test_equal_graphs_compare_equal(self):
        assert read_description(FIXTURES / "my_blog.yaml") == read_description(FIXTURES / "my_blog.yaml")

    def test_different_graphs_compare_unequal(self):
        blog = read_description(FIXTURES / "my_blog.yaml")
        other = read_description(FIXTURES / "my_blog.yaml")
        other.resources[0].methods[0].verb = "HEAD"
        assert blog != other

    def test_equal_node_found_in_group(self):
        registry = Registry()
        load(read_description(FIXTURES / "my_blog.yaml"), registry)
        other = read_description(FIXTURES / "my_blog.yaml")
        assert other.resources[0].methods[0] in registry.group("method")
        assert other.resources[0].methods[0].responses[0] in registry.group("response")

    def test_nodes_of_different_type_unequal(self):
        assert Parameter(name="x") != Header(name="x")


class TestGraphCopy:
    def test_deepcopy_relinks_parents(self):
        blog = read_description(FIXTURES / "my_blog.yaml")
        copied = copy.deepcopy(blog)

        assert copied == blog
        method = copied.resources[0].methods[0]
        assert method.parent is copied.resources[0]
        assert method.responses[0].parent is method
        assert method.responses[0].bodies[0].parent is method.responses[0]

    def test_model_copy_update_relinks_children(self):
        blog = read_description(FIXTURES / "my_blog.yaml")
        resource = blog.resources[0]
        renamed = resource.model_copy(update={"path": "/articles"})

        assert build_uri_template(renamed.methods[0]) == "/articles{?page,sort}"
        assert renamed.methods[0].responses[0].parent is renamed.methods[0]

    def test_model_copy_leaves_original_links(self):
        blog = read_description(FIXTURES / "my_blog.yaml")
        resource = blog.resources[0]
        resource.model_copy(update={"path": "/articles"})

        assert resource.methods[0].parent is resource
        assert build_uri_template(resource.methods[0]) == "/posts{?page,sort}"

    def test_deep_model_copy_relinks_parents(self):
        method = Method(verb="GET", responses=[Response(status=200, bodies=[Body(media_type="text/plain")])])
        resource = Resource(path="/posts", methods=[method])
        copied = resource.model_copy(deep=True)

        assert copied.methods[0] is not method
        assert copied.methods[0].parent is copied
        assert copied.methods[0].responses[0].bodies[0].parent is copied.methods[0].responses[0]
