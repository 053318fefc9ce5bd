from exline.core.collaborators import Collaborators, HistoryKind
from exline.core.commands import default_registry
from exline.session.completion import CandidateSource, CompletionSession


def _session(env: Collaborators) -> CompletionSession:
    return CompletionSession.for_collaborators(default_registry(), env)


def test_empty_command_completes_every_name_in_order(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":") == ":bma"
    assert session.active
    assert session.displayed_text == ":bma"
    assert session.complete(":bma") == ":bmr"
    assert session.complete(":bmr", -1) == ":bma"
    assert session.candidates == tuple(default_registry().names())


def test_backwards_start_selects_last_candidate(env: Collaborators) -> None:
    assert _session(env).complete(":", -1) == ":tabopen"


def test_partial_name_completes_in_registry_order(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":sh") == ":shellcmd"
    assert session.complete(":shellcmd") == ":shortcut-add"
    assert session.reconstruction_prefix == ":"


def test_cycling_wraps_around(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":qp") == ":qpop"
    assert session.complete(":qpop") == ":qpush"
    assert session.complete(":qpush") == ":qpop"


def test_count_is_reinserted_before_name(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":5no") == ":5normal"
    assert session.leading_count == 5


def test_setting_names_are_sorted(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":set ") == ":set cookie-accept"
    assert session.reconstruction_prefix == ":set "
    assert session.candidates == tuple(sorted(session.candidates))


def test_argument_prefix_keeps_typed_abbreviation(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":se sc") == ":se scripts"
    assert session.complete(":se scripts") == ":se scripts"


def test_open_completes_url_history_newest_first(env: Collaborators) -> None:
    env.history.add(HistoryKind.URL, "http://a")
    env.history.add(HistoryKind.URL, "http://b")
    session = _session(env)
    assert session.complete(":open ") == ":open http://b"
    assert session.complete(":open http://b") == ":open http://a"


def test_open_with_bang_completes_bookmarks(env: Collaborators) -> None:
    env.bookmarks.add("http://x", "X", "news")
    env.bookmarks.add("http://y", "Y", "sport")
    session = _session(env)
    assert session.complete(":tabopen !news") == ":tabopen http://x"
    assert session.candidates == ("http://x",)


def test_bma_completes_tags(env: Collaborators) -> None:
    env.bookmarks.add("http://x", "X", "travel tech")
    assert _session(env).complete(":bma t") == ":bma tech"


def test_command_without_argument_source_has_no_candidates(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":quit ") is None
    assert not session.active


def test_search_completes_sorted_search_history(env: Collaborators) -> None:
    env.history.add(HistoryKind.SEARCH, "foo")
    env.history.add(HistoryKind.SEARCH, "fob")
    env.history.add(HistoryKind.SEARCH, "bar")
    session = _session(env)
    assert session.complete("/fo") == "/fob"
    assert session.complete("/fob") == "/foo"
    session.cancel()
    assert session.complete("?fo") == "?fob"


def test_edited_input_restarts_classification(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":set ") == ":set cookie-accept"
    assert session.complete(":set h") == ":set hint-timeout"
    assert session.candidates == ("hint-timeout", "history-max-items", "home-page")
    assert session.complete(":set hint-timeout") == ":set history-max-items"


def test_edited_input_without_match_leaves_session_idle(env: Collaborators) -> None:
    session = _session(env)
    assert session.complete(":") == ":bma"
    assert session.complete(":zz") is None
    assert not session.active
    assert session.displayed_text == ""


def test_zero_direction_cancels(env: Collaborators) -> None:
    session = _session(env)
    session.complete(":")
    assert session.complete(":bma", 0) is None
    assert not session.active
    assert session.selected is None


def test_input_without_sigil_is_not_completed(env: Collaborators) -> None:
    assert _session(env).complete("xyz") is None
    assert _session(env).complete("") is None


def test_custom_sources() -> None:
    registry = default_registry()
    session = CompletionSession(registry, search_source=CandidateSource(lambda query: ["b", "a"], sort=True))
    assert session.complete("/") == "/a"
    assert session.complete(":set x") is None
