"""
Tests for the Prop entity.

Tests name validation, keyframes replacement and re-subscription, event
bubbling, serialization, CSS transform classification and teardown.
"""
import pytest
from unittest.mock import MagicMock

from tweenprops.application.events.events import ChangeEvent
from tweenprops.application.validation import MalformedObjectError, ValidationError
from tweenprops.domain.entities.keyframes import Keyframes
from tweenprops.domain.entities.prop import CSS_TRANSFORMS, Prop


RAW_X = {
    "0.1s": {"value": 10, "ease": None},
    "0.2s": {"value": 0, "ease": None},
    "0.3s": {"value": 100, "ease": "Power3.easeOut"},
}


@pytest.fixture
def prop():
    return Prop("x", RAW_X)


def record(emitter, names=Prop.EVENTS):
    """Subscribe to every name and collect (name, event) pairs."""
    seen = []
    for name in names:
        emitter.on(name, lambda e: seen.append((e.name, e)))
    return seen


def own_handler_count(keyframes):
    return sum(keyframes.events.get_subscriber_count(name) for name in Keyframes.EVENTS)


# =============================================================================
# Construction Tests
# =============================================================================

class TestPropConstruction:
    """Tests for creating props."""

    def test_default_keyframes(self):
        """Test a prop without keyframe data gets an empty collection."""
        prop = Prop("x")
        assert isinstance(prop.keyframes, Keyframes)
        assert len(prop.keyframes) == 0

    def test_wraps_raw_mapping(self, prop):
        """Test raw keyframe data is wrapped in Keyframes."""
        assert isinstance(prop.keyframes, Keyframes)
        assert prop.keyframes.get("0.3s").ease == "Power3.easeOut"

    def test_wraps_raw_sequence(self):
        """Test sequence keyframe data is wrapped in Keyframes."""
        prop = Prop("y", [{"time": "1s", "value": 5}])
        assert prop.to_object() == {"y": {"1s": {"value": 5, "ease": None}}}

    def test_adopts_existing_keyframes(self):
        """Test an existing Keyframes instance is used as-is."""
        keyframes = Keyframes(RAW_X)
        prop = Prop("x", keyframes)
        assert prop.keyframes is keyframes

    @pytest.mark.parametrize("name", [None, "", "x1", "2d", 5, ["x"]])
    def test_invalid_name_raises(self, name):
        """Test construction with an invalid name fails."""
        with pytest.raises(ValidationError):
            Prop(name)

    def test_malformed_keyframes_raise(self):
        """Test uncoercible keyframe data fails."""
        with pytest.raises(MalformedObjectError):
            Prop("x", "not-keyframes")

    def test_not_linked(self, prop):
        """Test a standalone prop has no list links."""
        assert prop.next() is None
        assert prop.prev() is None
        assert prop.list is None


# =============================================================================
# Name Tests
# =============================================================================

class TestPropName:
    """Tests for the validated name setter."""

    @pytest.mark.parametrize("name", ["y", "rotation", "scaleX", "background-color", "opacity"])
    def test_valid_rename_emits_once(self, prop, name):
        """Test a digit-free rename emits change:name exactly once."""
        handler = MagicMock()
        prop.on("change:name", handler)

        prop.name = name

        assert prop.name == name
        handler.assert_called_once()
        event = handler.call_args[0][0]
        assert isinstance(event, ChangeEvent)
        assert (event.old_value, event.new_value) == ("x", name)
        assert event.data["name"] == name
        assert event.source is prop

    def test_rename_emits_change_then_change_name(self, prop):
        """Test the generic change event comes first."""
        seen = record(prop)
        prop.name = "y"
        assert [name for name, _ in seen] == ["change", "change:name"]
        assert seen[0][1].field_name == "name"

    @pytest.mark.parametrize("name", ["x1", "0", "rotation3d", "", None, 7])
    def test_invalid_rename_keeps_name(self, prop, name):
        """Test a rejected rename leaves the name alone and emits nothing."""
        seen = record(prop)

        with pytest.raises(ValidationError) as exc_info:
            prop.name = name

        assert exc_info.value.field_name == "name"
        assert prop.name == "x"
        assert seen == []

    def test_digit_error_message(self, prop):
        """Test the failure explains the rule."""
        with pytest.raises(ValidationError, match="must not contain digits"):
            prop.name = "x2"

    @pytest.mark.parametrize("name", [" ", "   ", "\t"])
    def test_whitespace_name_accepted(self, prop, name):
        """Test a non-empty digit-free name is accepted even if it is blank."""
        handler = MagicMock()
        prop.on("change:name", handler)

        prop.name = name

        assert prop.name == name
        handler.assert_called_once()

    def test_empty_name_message(self, prop):
        """Test the empty string is reported as missing."""
        with pytest.raises(ValidationError, match="name: is required"):
            prop.name = ""


# =============================================================================
# Keyframes Replacement Tests
# =============================================================================

class TestPropKeyframesReplacement:
    """Tests for the keyframes setter and re-subscription."""

    def test_replace_emits_change_keyframes(self, prop):
        """Test replacing keyframes emits change and change:keyframes."""
        old = prop.keyframes
        seen = record(prop, ["change", "change:keyframes"])

        prop.keyframes = {"1s": {"value": 1, "ease": None}}

        assert [name for name, _ in seen] == ["change", "change:keyframes"]
        event = seen[1][1]
        assert event.old_value is old
        assert event.new_value is prop.keyframes

    def test_replace_clears_and_detaches_old(self, prop):
        """Test the old collection is emptied and no longer bubbles."""
        old = prop.keyframes
        prop.keyframes = Keyframes()

        assert len(old) == 0
        assert own_handler_count(old) == 0

        handler = MagicMock()
        for name in Prop.EVENTS:
            prop.on(name, handler)
        old.add("1s", 1)

        handler.assert_not_called()

    def test_old_clear_not_bubbled(self, prop):
        """Test emptying the old collection does not leak remove events."""
        handler = MagicMock()
        prop.on("remove:keyframe", handler)

        prop.keyframes = Keyframes()

        handler.assert_not_called()

    def test_new_collection_bubbles(self, prop):
        """Test mutations on the new collection reach the prop."""
        new = Keyframes()
        prop.keyframes = new
        seen = record(prop)

        new.add("0.5s", 3)

        assert [name for name, _ in seen] == ["add:keyframe", "change:keyframes:list"]

    def test_same_instance_resubscribes_without_duplicates(self, prop):
        """Test re-assigning the owned instance keeps exactly one handler set."""
        keyframes = prop.keyframes
        count = own_handler_count(keyframes)

        prop.keyframes = keyframes
        prop.keyframes = keyframes

        assert own_handler_count(keyframes) == count
        assert len(keyframes) == 3

        handler = MagicMock()
        prop.on("change:keyframe:value", handler)
        keyframes.get("0.1s").value = 11
        handler.assert_called_once()

    def test_same_instance_still_emits(self, prop):
        """Test re-assigning the owned instance still emits change:keyframes."""
        handler = MagicMock()
        prop.on("change:keyframes", handler)
        prop.keyframes = prop.keyframes
        handler.assert_called_once()

    def test_setup_bubble_events_is_idempotent(self, prop):
        """Test calling setup repeatedly never stacks handlers."""
        count = own_handler_count(prop.keyframes)
        for _ in range(3):
            prop.setup_bubble_events()
        assert own_handler_count(prop.keyframes) == count
        assert count == len(Prop.KEYFRAMES_EVENTS)

    def test_foreign_listeners_survive_replacement(self, prop):
        """Test other parties' handlers on the old collection are untouched."""
        old = prop.keyframes
        foreign = MagicMock()
        old.on("add", foreign)

        prop.keyframes = Keyframes()
        old.add("2s", 2)

        foreign.assert_called_once()

    def test_malformed_replacement_keeps_state(self, prop):
        """Test a failed coercion changes nothing."""
        old = prop.keyframes
        handler = MagicMock()
        prop.on("change", handler)

        with pytest.raises(MalformedObjectError):
            prop.keyframes = 42

        assert prop.keyframes is old
        assert len(old) == 3
        handler.assert_not_called()


# =============================================================================
# Ownership Tests
# =============================================================================

class TestPropKeyframesOwnership:
    """Tests for exclusive ownership of a Keyframes instance."""

    def test_owner_is_set(self, prop):
        """Test the adopted collection points back at the prop."""
        assert prop.keyframes.owner is prop

    def test_sharing_with_another_prop_raises(self, prop):
        """Test a second prop cannot adopt an owned collection."""
        other = Prop("y")
        before = other.keyframes
        handler = MagicMock()
        other.on("change", handler)

        with pytest.raises(ValueError):
            other.keyframes = prop.keyframes

        assert other.keyframes is before
        assert len(prop.keyframes) == 3
        handler.assert_not_called()

    def test_constructing_with_owned_collection_raises(self, prop):
        """Test construction refuses a collection another prop owns."""
        with pytest.raises(ValueError):
            Prop("y", prop.keyframes)

    def test_replacing_keeps_copies_intact(self, prop):
        """Test a copy survives when the original owner replaces its keyframes."""
        other = Prop("y", Keyframes(prop.keyframes))

        prop.keyframes = Keyframes()

        assert other.to_object() == {"y": RAW_X}

    def test_replaced_collection_is_released(self, prop):
        """Test a replaced collection can be adopted by another prop."""
        old = prop.keyframes
        prop.keyframes = Keyframes()

        assert old.owner is None
        other = Prop("y", old)
        assert old.owner is other

    def test_destroy_releases_collection(self, prop):
        """Test a destroyed prop no longer holds its collection."""
        keyframes = prop.keyframes
        prop.destroy()

        assert keyframes.owner is None
        assert Prop("y", keyframes).keyframes is keyframes


# =============================================================================
# Bubbling Tests
# =============================================================================

class TestPropBubbling:
    """Tests for keyframe events re-emitted on the prop."""

    def test_value_edit(self, prop):
        """Test a value edit surfaces as change:keyframe and change:keyframe:value."""
        seen = record(prop)
        keyframe = prop.keyframes.get("0.2s")

        keyframe.value = 42

        assert [name for name, _ in seen] == ["change:keyframe", "change:keyframe:value"]
        event = seen[1][1]
        assert event.source is prop
        assert event.path == [keyframe, prop.keyframes, prop]
        assert event.data["time"] == pytest.approx(0.2)
        assert (event.old_value, event.new_value) == (0, 42)

    def test_ease_edit(self, prop):
        """Test an ease edit surfaces as change:keyframe:ease."""
        handler = MagicMock()
        prop.on("change:keyframe:ease", handler)
        prop.keyframes.get("0.1s").ease = "Sine.easeIn"
        assert handler.call_args[0][0].new_value == "Sine.easeIn"

    def test_time_edit(self, prop):
        """Test a time edit surfaces as change:keyframe:time and change:keyframes:list."""
        seen = record(prop, ["change:keyframe:time", "change:keyframes:list"])
        prop.keyframes.get("0.1s").time = 1
        assert [name for name, _ in seen] == ["change:keyframe:time", "change:keyframes:list"]

    def test_add_keyframe(self, prop):
        """Test adding a keyframe emits add:keyframe with its data."""
        handler = MagicMock()
        prop.on("add:keyframe", handler)

        keyframe = prop.keyframes.add("0.4s", 7, "Power1.easeOut")

        event = handler.call_args[0][0]
        assert event.data["keyframe"] is keyframe
        assert event.data["value"] == 7
        assert event.data["ease"] == "Power1.easeOut"
        assert event.source is prop

    def test_remove_keyframe(self, prop):
        """Test removing a keyframe emits remove:keyframe."""
        handler = MagicMock()
        prop.on("remove:keyframe", handler)

        prop.keyframes.remove("0.1s")

        handler.assert_called_once()
        assert handler.call_args[0][0].data["value"] == 10

    def test_vocabulary_is_closed(self):
        """Test every bubbled name belongs to the declared vocabulary."""
        assert set(Prop.KEYFRAMES_EVENTS.values()) <= set(Prop.EVENTS)
        assert set(Prop.KEYFRAMES_EVENTS) == set(Keyframes.EVENTS)
        local = {"change", "change:name", "change:keyframes"}
        assert set(Prop.EVENTS) == local | set(Prop.KEYFRAMES_EVENTS.values())


# =============================================================================
# Serialization Tests
# =============================================================================

class TestPropSerialization:
    """Tests for to_object / from_object."""

    def test_to_object_empty(self):
        """Test a fresh prop serializes to an empty mapping."""
        assert Prop("x").to_object() == {"x": {}}

    def test_to_object(self, prop):
        """Test to_object uses the name as the single key."""
        assert prop.to_object() == {"x": RAW_X}

    def test_from_object_round_trip(self):
        """Test from_object rebuilds an equivalent prop."""
        raw = {"x": {"0.1s": {"value": 10, "ease": None}}}
        prop = Prop.from_object(raw)
        assert prop.name == "x"
        assert prop.to_object() == raw

    def test_from_object_round_trip_close_times(self):
        """Test keyframes under a microsecond apart are not merged by serialization."""
        raw = {"x": {
            "1e-07s": {"value": 1, "ease": None},
            "2e-07s": {"value": 2, "ease": None},
        }}
        assert Prop.from_object(raw).to_object() == raw

    def test_from_object_uses_first_key(self):
        """Test only the first key becomes the prop."""
        prop = Prop.from_object({"x": {}, "y": {"1s": {"value": 1, "ease": None}}})
        assert prop.to_object() == {"x": {}}

    @pytest.mark.parametrize("raw", [
        {},
        {"x": "not-an-object"},
        {"x": {}, "y": 5},
        "x",
        None,
        [("x", {})],
    ])
    def test_from_object_malformed(self, raw):
        """Test malformed input raises MalformedObjectError."""
        with pytest.raises(MalformedObjectError):
            Prop.from_object(raw)

    def test_from_object_invalid_name(self):
        """Test a well-formed mapping with a bad name fails validation."""
        with pytest.raises(ValidationError):
            Prop.from_object({"x1": {}})

    def test_to_object_does_not_emit(self, prop):
        """Test serialization has no side effects."""
        seen = record(prop)
        prop.to_object()
        assert seen == []


# =============================================================================
# Classification Tests
# =============================================================================

class TestPropCSSTransform:
    """Tests for is_css_transform."""

    @pytest.mark.parametrize("name", sorted(CSS_TRANSFORMS))
    def test_transforms(self, name):
        """Test every transform name is recognized."""
        assert Prop(name).is_css_transform() is True

    @pytest.mark.parametrize("name", ["opacity", "width", "color", "X", "scalex"])
    def test_non_transforms(self, name):
        """Test other names are not transforms."""
        assert Prop(name).is_css_transform() is False

    def test_follows_rename(self):
        """Test classification tracks the current name."""
        prop = Prop("opacity")
        prop.name = "scaleX"
        assert prop.is_css_transform() is True


# =============================================================================
# Teardown Tests
# =============================================================================

class TestPropDestroy:
    """Tests for destroy."""

    def test_destroy_stops_bubbling(self, prop):
        """Test add/remove on the former keyframes no longer reach listeners."""
        keyframes = prop.keyframes
        added, removed = MagicMock(), MagicMock()
        prop.on("add:keyframe", added)
        prop.on("remove:keyframe", removed)

        prop.destroy()
        keyframes.add("2s", 2)
        keyframes.remove("0.1s")

        added.assert_not_called()
        removed.assert_not_called()
        assert own_handler_count(keyframes) == 0

    def test_destroy_removes_own_listeners(self, prop):
        """Test listeners registered on the prop are dropped."""
        prop.on("change:name", MagicMock())
        prop.destroy()
        assert prop.events.event_names() == []

    def test_destroy_keeps_foreign_keyframes_listeners(self, prop):
        """Test destroy only removes the prop's own handlers on its keyframes."""
        foreign = MagicMock()
        prop.keyframes.on("add", foreign)

        prop.destroy()
        prop.keyframes.add("2s", 2)

        foreign.assert_called_once()

    def test_serialization_after_destroy(self, prop):
        """Test to_object and is_css_transform still work."""
        prop.destroy()
        assert prop.to_object() == {"x": RAW_X}
        assert prop.is_css_transform() is True
