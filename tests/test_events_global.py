from emitter.config import EmitterSettings
from emitter.events import emit, get_emitter, on, once, remove_all_listeners


def test_get_emitter_is_shared(default_emitter):
    assert get_emitter() is default_emitter
    assert isinstance(default_emitter.settings, EmitterSettings)


def test_module_level_helpers(default_emitter):
    values = []

    on("saved", lambda e, path: values.append(("on", path)))
    once("saved", lambda e, path: values.append(("once", path)))
    unsubscribe = on(lambda e, path: values.append(("any", path)))

    emit("saved", "a.json")
    unsubscribe()
    emit("saved", "b.json")

    assert values == [
        ("any", "a.json"),
        ("on", "a.json"),
        ("once", "a.json"),
        ("on", "b.json"),
    ]


def test_on_as_decorator(default_emitter):
    values = []

    @on("saved")
    def handle_saved(event, path):
        values.append(path)

    emit("saved", "out.json")

    assert callable(handle_saved)
    assert values == ["out.json"]

    remove_all_listeners()
    emit("saved", "ignored.json")
    assert values == ["out.json"]


def test_global_emitter_reads_environment(monkeypatch):
    monkeypatch.setattr("emitter.events.emitter._emitter", None)
    monkeypatch.setenv("EMITTER_ID_LENGTH", "10")
    monkeypatch.setenv("EMITTER_ISOLATE_ERRORS", "true")

    bus = get_emitter()

    assert bus.settings.id_length == 10
    assert bus.settings.isolate_errors is True
