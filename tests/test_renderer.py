import unittest

from mobiledoc.exceptions import PluginError, RendererError
from mobiledoc.models import CardSection, Document, ImageSection
from mobiledoc.rendering.nodes import Element, Fragment, text_content
from mobiledoc.rendering.options import RendererOptions
from mobiledoc.rendering.renderer import Renderer
from mobiledoc.rendering.renderer_iface import AtomEnv, CardEnv


def _doc(**kwargs):
    raw = {"version": "0.3.2", "markups": [], "atoms": [], "cards": [], "sections": []}
    raw.update(kwargs)
    return raw


def _suppressing(errors):
    return RendererOptions(error_handler=errors.append, suppress_errors=True)


class TestBasicRendering(unittest.TestCase):
    def test_empty_document(self):
        result = Renderer().render(_doc()).result
        self.assertEqual(result, Fragment(()))

    def test_paragraph(self):
        result = Renderer().render(
            _doc(sections=[[1, "p", [[0, [], 0, "Hello world"]]]])
        ).result
        (p,) = result.children
        self.assertEqual(p.tag, "p")
        self.assertEqual(p.attributes, {})
        self.assertEqual(p.text_content(), "Hello world")

    def test_accepts_document_instance(self):
        doc = Document(**_doc(sections=[[1, "h2", [[0, [], 0, "Title"]]]]))
        result = Renderer().render(doc).result
        self.assertEqual(result.children[0].tag, "h2")

    def test_section_attributes(self):
        result = Renderer().render(
            _doc(sections=[[1, "p", [], ["data-md-text-align", "center"]]])
        ).result
        self.assertEqual(result.children[0].attributes, {"data-md-text-align": "center"})

    def test_markup(self):
        result = Renderer().render(
            _doc(
                markups=[["a", ["href", "https://example.com"]]],
                sections=[[1, "p", [[0, [0], 1, "link"]]]],
            )
        ).result
        (link,) = result.children[0].children
        self.assertEqual(
            link, Element("a", {"href": "https://example.com"}, ("link",))
        )

    def test_only_first_open_markup_is_applied(self):
        result = Renderer().render(
            _doc(markups=[["b"], ["i"]], sections=[[1, "p", [[0, [0, 1], 2, "x"]]]])
        ).result
        self.assertEqual(result.children[0].children, (Element("b", {}, ("x",)),))

    def test_image_section(self):
        result = Renderer().render(_doc(sections=[[2, "https://example.com/a.png"]])).result
        self.assertEqual(
            result.children, (Element("img", {"src": "https://example.com/a.png"}),)
        )

    def test_list_section(self):
        result = Renderer().render(
            _doc(sections=[[3, "ul", [[[0, [], 0, "first"]], [[0, [], 0, "second"]]]]])
        ).result
        (ul,) = result.children
        self.assertEqual(ul.tag, "ul")
        self.assertEqual([li.tag for li in ul.children], ["li", "li"])
        self.assertEqual([text_content(li) for li in ul.children], ["first", "second"])

    def test_invalid_input_surfaces_validation_error(self):
        from mobiledoc.exceptions import MobiledocValidationError

        with self.assertRaises(MobiledocValidationError):
            Renderer().render(_doc(sections=[[42]]))


class TestAtoms(unittest.TestCase):
    def _mention_doc(self):
        return _doc(
            atoms=[["mention", "@bob", {"id": 42}]],
            sections=[[1, "p", [[0, [], 0, "Hi "], [1, [], 0, 0]]]],
        )

    def test_atom_handler(self):
        calls = []

        def mention(*, env, options, payload, value):
            calls.append((env.name, options, payload, value))
            return Element("span", {"class": "mention"}, (value,))

        renderer = Renderer(atoms={"mention": mention}, atom_options={"base": "/u/"})
        result = renderer.render(self._mention_doc()).result
        self.assertEqual(calls, [("mention", {"base": "/u/"}, {"id": 42}, "@bob")])
        self.assertEqual(
            result.children[0].children[1], Element("span", {"class": "mention"}, ("@bob",))
        )
        self.assertEqual(text_content(result), "Hi @bob")

    def test_atom_env_save_reinvokes_handler(self):
        envs = []

        def mention(*, env, options, payload, value):
            envs.append(env)
            return (value, payload)

        Renderer(atoms={"mention": mention}).render(self._mention_doc())
        (env,) = envs
        self.assertIsInstance(env, AtomEnv)
        self.assertEqual(env.save("@robert"), ("@robert", {"id": 42}))
        self.assertEqual(env.save(new_payload={"id": 1}), ("@bob", {"id": 1}))
        self.assertEqual(len(envs), 3)

    def test_unknown_atom_handler(self):
        def fallback(*, env, options, payload, value):
            return f"[{env.name}:{value}]"

        result = Renderer(unknown_atom_handler=fallback).render(self._mention_doc()).result
        self.assertEqual(result.children[0].children[1], "[mention:@bob]")

    def test_missing_atom_handler(self):
        with self.assertRaisesRegex(RendererError, "No atom handler specified for: mention"):
            Renderer().render(self._mention_doc())

    def test_atom_index_out_of_range(self):
        with self.assertRaisesRegex(RendererError, "Could not locate atom with index: 0"):
            Renderer().render(_doc(sections=[[1, "p", [[1, [], 0, 0]]]]))


class TestCards(unittest.TestCase):
    def _gallery_doc(self):
        return _doc(cards=[["gallery", {"images": ["a.png"]}]], sections=[[10, 0]])

    def test_card_handler(self):
        calls = []

        def gallery(*, env, options, payload):
            calls.append((env, options, payload))
            return Element("figure", {}, tuple(payload["images"]))

        result = Renderer(cards={"gallery": gallery}, card_options={"lazy": True}).render(
            self._gallery_doc()
        ).result
        self.assertEqual(result.children, (Element("figure", {}, ("a.png",)),))
        self.assertEqual(
            calls, [(CardEnv(name="gallery"), {"lazy": True}, {"images": ["a.png"]})]
        )
        self.assertFalse(calls[0][0].is_in_editor)

    def test_unknown_card_handler(self):
        def fallback(*, env, options, payload):
            return Element("div", {"data-card": env.name})

        result = Renderer(unknown_card_handler=fallback).render(self._gallery_doc()).result
        self.assertEqual(result.children, (Element("div", {"data-card": "gallery"}),))

    def test_registered_handler_wins_over_unknown_handler(self):
        result = Renderer(
            cards={"gallery": lambda **kw: "known"},
            unknown_card_handler=lambda **kw: "unknown",
        ).render(self._gallery_doc()).result
        self.assertEqual(result.children, ("known",))

    def test_missing_card_handler(self):
        with self.assertRaisesRegex(RendererError, "No card handler specified for: gallery"):
            Renderer().render(self._gallery_doc())

    def test_card_index_out_of_range(self):
        doc = Document.model_construct(
            version="0.3.2",
            markups=(),
            atoms=(),
            cards=(),
            sections=(CardSection(card_index=0),),
        )
        with self.assertRaisesRegex(RendererError, "Could not locate card with index: 0"):
            Renderer().render(doc)


class TestErrorPolicy(unittest.TestCase):
    def test_invalid_markup_reference_raises(self):
        with self.assertRaisesRegex(RendererError, "Invalid markup reference: 3"):
            Renderer().render(_doc(sections=[[1, "p", [[0, [3], 1, "x"]]]]))

    def test_suppressed_errors_drop_nodes_and_keep_siblings(self):
        errors = []
        result = Renderer(options=_suppressing(errors)).render(
            _doc(
                atoms=[["mention", "@bob", {}]],
                cards=[["gallery", {}]],
                sections=[
                    [1, "p", [[0, [], 0, "before "], [1, [], 0, 0], [0, [], 0, " after"]]],
                    [10, 0],
                    [1, "p", [[0, [], 0, "last"]]],
                ],
            )
        ).result
        self.assertEqual(
            errors,
            [
                "No atom handler specified for: mention",
                "No card handler specified for: gallery",
            ],
        )
        self.assertEqual(len(result.children), 2)
        self.assertEqual(text_content(result.children[0]), "before  after")
        self.assertEqual(text_content(result.children[1]), "last")

    def test_suppressed_errors_without_handler(self):
        result = Renderer(options=RendererOptions(suppress_errors=True)).render(
            _doc(sections=[[1, "p", [[0, [3], 1, "x"]]]])
        ).result
        self.assertEqual(result.children[0].children, ())

    def test_unrecognized_section(self):
        doc = Document.model_construct(
            version="0.3.2", markups=(), atoms=(), cards=(), sections=(("foo",),)
        )
        with self.assertRaisesRegex(
            RendererError, "Could not parse unrecognized section type: foo"
        ):
            Renderer().render(doc)

    def test_teardown_is_not_supported(self):
        rendered = Renderer().render(_doc())
        with self.assertRaisesRegex(RendererError, "Teardown is not supported"):
            rendered.teardown()

    def test_teardown_suppressed(self):
        errors = []
        Renderer(options=_suppressing(errors)).render(_doc()).teardown()
        self.assertEqual(errors, ["Teardown is not supported"])

    def test_options_from_env(self):
        from unittest import mock

        with mock.patch.dict("os.environ", {"MOBILEDOC_SUPPRESS_ERRORS": "1"}):
            self.assertTrue(RendererOptions.from_env().suppress_errors)
        with mock.patch.dict("os.environ", {"MOBILEDOC_SUPPRESS_ERRORS": "off"}):
            self.assertFalse(RendererOptions.from_env().suppress_errors)


class TestPlugins(unittest.TestCase):
    def test_section_plugin_full_node_skips_markers(self):
        class Replace:
            def on_render_section(self, section, *, document):
                return Element("section", {}, ("replaced",))

        # The atom has no handler: visiting the markers would raise.
        result = Renderer(plugins=[Replace()]).render(
            _doc(atoms=[["mention", "@bob", {}]], sections=[[1, "p", [[1, [], 0, 0]]]])
        ).result
        self.assertEqual(result.children, (Element("section", {}, ("replaced",)),))

    def test_section_plugin_tag_override(self):
        class Article:
            def on_render_section(self, section, *, document):
                return "article"

        result = Renderer(plugins=[Article()]).render(
            _doc(sections=[[1, "p", [[0, [], 0, "body"]]], [3, "ul", [[[0, [], 0, "a"]]]]])
        ).result
        self.assertEqual([node.tag for node in result.children], ["article", "article"])
        self.assertEqual(text_content(result.children[0]), "body")
        self.assertEqual(result.children[1].children[0].tag, "li")

    def test_section_plugin_receives_document(self):
        seen = []

        class Spy:
            def on_render_section(self, section, *, document):
                seen.append((section.tag_name, document.version))

        Renderer(plugins=[Spy()]).render(_doc(sections=[[1, "h1", []]]))
        self.assertEqual(seen, [("h1", "0.3.2")])

    def test_section_plugin_not_consulted_for_images(self):
        seen = []

        class Spy:
            def on_render_section(self, section, *, document):
                seen.append(section)
                return "figure"

        result = Renderer(plugins=[Spy()]).render(_doc(sections=[[2, "a.png"]])).result
        self.assertEqual(seen, [])
        self.assertEqual(result.children, (Element("img", {"src": "a.png"}),))

    def test_section_plugin_card_override(self):
        class Cards:
            def on_render_section(self, section, *, document):
                if isinstance(section, CardSection):
                    card = document.get_card(section.card_index)
                    return Element("aside", {}, (card.name,))
                return None

        result = Renderer(plugins=[Cards()]).render(
            _doc(cards=[["gallery", {}]], sections=[[10, 0]])
        ).result
        self.assertEqual(result.children, (Element("aside", {}, ("gallery",)),))

    def test_first_plugin_wins(self):
        class H2:
            def on_render_section(self, section, *, document):
                return "h2"

        class H3:
            def on_render_section(self, section, *, document):
                return "h3"

        class Pass:
            def on_render_section(self, section, *, document):
                return None

        result = Renderer(plugins=[Pass(), H2(), H3()]).render(
            _doc(sections=[[1, "p", []]])
        ).result
        self.assertEqual(result.children[0].tag, "h2")

    def test_component_tag_override(self):
        def Paragraph(*children, **attributes):
            return Element("div", attributes, children)

        class Components:
            def on_render_section(self, section, *, document):
                return Paragraph

        result = Renderer(plugins=[Components()]).render(
            _doc(sections=[[1, "p", [[0, [], 0, "x"]]]])
        ).result
        self.assertIs(result.children[0].tag, Paragraph)
        self.assertEqual(result.children[0].tag_name, "Paragraph")

    def test_markup_plugin(self):
        payloads = []

        class Strong:
            def on_render_markup(self, payload, *, document):
                payloads.append(payload)
                return "strong" if payload.tag_name == "b" else None

        result = Renderer(plugins=[Strong()]).render(
            _doc(
                markups=[["b"], ["a", ["href", "/x"]]],
                sections=[[1, "p", [[0, [0], 1, "bold"], [0, [1], 1, "link"]]]],
            )
        ).result
        self.assertEqual(
            result.children[0].children,
            (Element("strong", {}, ("bold",)), Element("a", {"href": "/x"}, ("link",))),
        )
        self.assertEqual(payloads[1].attributes, {"href": "/x"})
        self.assertEqual(payloads[1].value, "link")

    def test_markup_plugin_node_results_are_ignored(self):
        class NodeResult:
            def on_render_markup(self, payload, *, document):
                return Element("mark", {}, ("ignored",))

        class Em:
            def on_render_markup(self, payload, *, document):
                return "em"

        result = Renderer(plugins=[NodeResult(), Em()]).render(
            _doc(markups=[["i"]], sections=[[1, "p", [[0, [0], 1, "x"]]]])
        ).result
        self.assertEqual(result.children[0].children, (Element("em", {}, ("x",)),))

    def test_non_callable_plugin_method(self):
        class Broken:
            on_render_section = "not a function"

        with self.assertRaises(PluginError) as ctx:
            Renderer(plugins=[Broken()]).render(_doc(sections=[[1, "p", []]]))
        self.assertEqual(ctx.exception.method, "on_render_section")
        self.assertIn("non-function method", str(ctx.exception))

    def test_non_callable_plugin_method_suppressed(self):
        class Broken:
            on_render_section = 5

        class H2:
            def on_render_section(self, section, *, document):
                return "h2"

        errors = []
        result = Renderer(plugins=[Broken(), H2()], options=_suppressing(errors)).render(
            _doc(sections=[[1, "p", []]])
        ).result
        self.assertEqual(errors, ["Plugin provided non-function method for: on_render_section"])
        self.assertEqual(result.children[0].tag, "h2")


class TestRendererAccessors(unittest.TestCase):
    def test_get_atom_and_card(self):
        atom = lambda **kw: None  # noqa: E731
        card = lambda **kw: None  # noqa: E731
        renderer = Renderer(atoms={"a": atom}, cards={"c": card})
        self.assertIs(renderer.get_atom("a"), atom)
        self.assertIs(renderer.get_card("c"), card)
        self.assertIsNone(renderer.get_atom("missing"))
        self.assertIsNone(renderer.get_card("missing"))

    def test_image_section_is_typed(self):
        doc = Document(**_doc(sections=[[2, "a.png"]]))
        self.assertIsInstance(doc.sections[0], ImageSection)


if __name__ == "__main__":
    unittest.main()
