"""Test <select> rendering."""

from markupsafe import Markup

from hyper_choices import ChoiceList, Model, SelectionBinding, SelectRenderer, onchange_script, render_select
from hyper_choices.html import render_attr, spread_attrs


class TestRenderSelect:
    """Test rendering a binding as a select element."""

    def test_selected_option(self):
        binding = SelectionBinding("size", Model("M"), ["S", "M", "L"])

        html = render_select(binding)

        assert isinstance(html, Markup)
        assert html == (
            '<select name="size">'
            '<option value="0">S</option>'
            '<option selected value="1">M</option>'
            '<option value="2">L</option>'
            '</select>'
        )

    def test_null_option_when_nothing_selected(self):
        binding = SelectionBinding("size", Model(), ["S", "M"])

        html = render_select(binding)

        assert html.startswith('<select name="size"><option selected value="-1">Choose One</option>')
        assert '<option value="0">S</option>' in html

    def test_null_valid_keeps_null_option(self):
        binding = SelectionBinding("size", Model("S"), ["S"], null_valid=True, null_label="None")

        html = render_select(binding)

        assert '<option value="-1">None</option>' in html
        assert '<option selected value="0">S</option>' in html

    def test_labels_and_tokens_are_escaped(self):
        choices = ChoiceList.from_entries([('a"b', "x", "<b>bold</b>")])
        binding = SelectionBinding("tag", Model("x"), choices)

        html = render_select(binding)

        assert 'value="a&#34;b"' in html
        assert '&lt;b&gt;bold&lt;/b&gt;' in html

    def test_tokens_are_not_url_encoded(self):
        choices = ChoiceList.from_entries([("a b/c", "x", "x")])
        html = render_select(SelectionBinding("tag", Model(), choices))
        assert 'value="a b/c"' in html

    def test_extra_attributes(self):
        binding = SelectionBinding("size", Model(), ["S"])

        html = render_select(binding, attrs={"id": "size-field", "disabled": True, "class": None})

        assert html.startswith('<select name="size" id="size-field" disabled>')

    def test_no_onchange_without_notifications(self):
        binding = SelectionBinding("size", Model(), ["S"])
        html = render_select(binding, listener_url="/page?listener=change")
        assert "onchange" not in html

    def test_onchange_with_notifications(self):
        binding = SelectionBinding("size", Model(), ["S"], want_change_notifications=True)

        html = render_select(binding, listener_url="/page?listener=change")

        assert 'onchange="location.href=&#39;/page?listener=change&amp;size=&#39;' in html

    def test_render_leaves_binding_awaiting_submission(self):
        binding = SelectionBinding("size", Model(), ["S"])
        render_select(binding)
        assert binding.state.value == "awaiting_submission"


class TestSelectRenderer:
    def test_defaults_to_nothing_selected(self):
        renderer = SelectRenderer("size")
        html = renderer.render(ChoiceList.from_values(["S"]))
        assert '<option selected value="-1">Choose One</option>' in html

    def test_mark_selected(self):
        renderer = SelectRenderer("size")
        renderer.mark_selected("0")
        html = renderer.render(ChoiceList.from_values(["S"]))
        assert html == '<select name="size"><option selected value="0">S</option></select>'


class TestHelpers:
    def test_onchange_script(self):
        assert onchange_script("/p?x=1", "size") == (
            "location.href='/p?x=1&size=' + this.options[this.selectedIndex].value;"
        )

    def test_render_select_example_is_not_a_doctest(self):
        """The usage example needs names html.py does not import."""
        assert ">>>" not in render_select.__doc__

    def test_render_attr(self):
        assert render_attr("selected", True) == " selected"
        assert render_attr("selected", False) == ""
        assert render_attr("value", None) == ""
        assert render_attr("value", "<") == ' value="&lt;"'

    def test_spread_attrs(self):
        assert spread_attrs({"id": "a", "required": True}) == ' id="a" required'
        assert spread_attrs(None) == ""
