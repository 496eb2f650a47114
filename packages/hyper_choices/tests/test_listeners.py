"""Test change listener registration and dispatch."""

from urllib.parse import parse_qs, urlsplit

import pytest

from hyper_choices import (
    ChangeListenerRegistry,
    FormRequest,
    ListenerNotFoundError,
    Model,
    SelectionBinding,
    StaleSelectionError,
)


@pytest.fixture
def registry():
    return ChangeListenerRegistry("/orders/42")


def change_request(url: str, name: str, token: str) -> FormRequest:
    """Build the request the browser sends from the onchange script."""
    query = urlsplit(f"{url}&{name}={token}").query
    return FormRequest(parse_qs(query, keep_blank_values=True))


class TestRegistration:
    def test_register_and_unregister(self, registry):
        binding = SelectionBinding("size", Model(), ["S"])

        registry.register(binding)
        assert "size" in registry

        registry.unregister("size")
        assert "size" not in registry

    def test_duplicate_registration_rejected(self, registry):
        registry.register(SelectionBinding("size", Model(), ["S"]))

        with pytest.raises(ValueError, match="already registered"):
            registry.register(SelectionBinding("size", Model(), ["M"]))

    @pytest.mark.parametrize("name", ["listener", "field"])
    def test_reserved_names_rejected(self, registry, name):
        with pytest.raises(ValueError, match="reserved"):
            registry.register(SelectionBinding(name, Model(), ["S"]))

    def test_registration_scoped_to_block(self, registry):
        binding = SelectionBinding("size", Model(), ["S"])

        with registry.registered(binding) as registered:
            assert registered is binding
            assert "size" in registry

        assert "size" not in registry

    def test_registries_are_independent(self):
        first = ChangeListenerRegistry("/a")
        second = ChangeListenerRegistry("/b")

        first.register(SelectionBinding("size", Model(), ["S"]))

        assert "size" not in second


class TestDispatch:
    """Test the selection-change round-trip."""

    def test_url_for(self, registry):
        assert registry.url_for("size") == "/orders/42?listener=change&field=size"

    def test_url_for_base_with_query(self):
        registry = ChangeListenerRegistry("/orders?page=2")
        assert registry.url_for("size") == "/orders?page=2&listener=change&field=size"

    def test_round_trip_notifies(self, registry):
        seen = []
        model = Model()
        binding = SelectionBinding(
            "size", model, ["S", "M", "L"], notifier=seen.append, want_change_notifications=True
        )
        registry.register(binding)

        html = registry.render(binding)
        assert "onchange=" in html

        value = registry.dispatch(change_request(registry.url_for("size"), "size", "2"))

        assert value == "L"
        assert model.get() == "L"
        assert seen == ["L"]

    def test_render_unregistered_has_no_onchange(self, registry):
        binding = SelectionBinding("size", Model(), ["S"], want_change_notifications=True)
        assert "onchange" not in registry.render(binding)

    def test_unknown_field(self, registry):
        with pytest.raises(ListenerNotFoundError) as exc_info:
            registry.dispatch(FormRequest({"listener": "change", "field": "size", "size": "0"}))
        assert exc_info.value.name == "size"

    def test_missing_field_parameter(self, registry):
        with pytest.raises(ListenerNotFoundError):
            registry.dispatch(FormRequest({"listener": "change"}))

    def test_stale_token_propagates(self, registry):
        model = Model("S")
        binding = registry.register(SelectionBinding("size", model, ["S"]))
        registry.render(binding)

        with pytest.raises(StaleSelectionError):
            registry.dispatch(change_request(registry.url_for("size"), "size", "5"))

        assert model.get() == "S"
