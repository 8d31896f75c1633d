from mercury_config.core.events import Event, EventBus, EventType
from mercury_config.storage import LoadStatus, Point, ResponseButton, SettingsStore


def collect(bus, event_type):
    seen = []
    bus.subscribe(event_type, seen.append)
    return seen


def test_failing_subscriber_does_not_block_others():
    bus = EventBus()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.SETTING_CHANGED, broken)
    bus.subscribe(EventType.SETTING_CHANGED, seen.append)
    bus.publish(Event(EventType.SETTING_CHANGED, ("minOpacity", 1)))

    assert [e.data for e in seen] == [("minOpacity", 1)]


def test_unsubscribe():
    bus = EventBus()
    seen = collect(bus, EventType.BUTTONS_CHANGED)
    bus.unsubscribe(EventType.BUTTONS_CHANGED, seen.append)
    bus.unsubscribe(EventType.SETTINGS_LOADED, seen.append)
    bus.publish(Event(EventType.BUTTONS_CHANGED, []))
    assert seen == []


def test_store_publishes_changes(config_dir):
    bus = EventBus()
    loaded = collect(bus, EventType.SETTINGS_LOADED)
    changed = collect(bus, EventType.SETTING_CHANGED)
    buttons = collect(bus, EventType.BUTTONS_CHANGED)
    frames = collect(bus, EventType.FRAME_SETTINGS_CHANGED)

    store = SettingsStore(config_dir=config_dir, event_bus=bus)
    store.load()
    store.max_opacity = 70
    store.save_buttons_config([ResponseButton(1, "a", "b")])
    store.save_frame_location("NotesFrame", Point(5, 6))

    assert loaded[0].data.status is LoadStatus.CREATED
    assert [e.data for e in changed] == [("maxOpacity", 70)]
    assert buttons[0].data == [ResponseButton(1, "a", "b")]
    frame_id, settings = frames[0].data
    assert frame_id == "NotesFrame"
    assert settings.location == Point(5, 6)
