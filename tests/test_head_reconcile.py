"""Tests for the head document and the diff/apply reconciler."""

from __future__ import annotations

import pytest

from lingvoblog.head import (
    HeadDocument,
    HeadElement,
    OpKind,
    Placement,
    ReconcilePolicy,
    apply_patch,
    diff,
    reconcile,
)


def _meta(name: str, content: str, owner: str = "test") -> HeadElement:
    return HeadElement(
        key=f"meta[name={name}]",
        tag="meta",
        attrs={"name": name, "content": content},
        owner=owner,
    )


class TestHeadDocument:
    def test_insert_rejects_duplicate_key(self):
        doc = HeadDocument([_meta("description", "a")])
        with pytest.raises(KeyError):
            doc.insert(_meta("description", "b"))

    def test_prepend_goes_first(self):
        doc = HeadDocument([_meta("a", "1")])
        doc.insert(
            HeadElement(key="#first", tag="noscript", placement=Placement.BODY, prepend=True)
        )
        assert [e.key for e in doc] == ["#first", "meta[name=a]"]

    def test_replace_keeps_position(self):
        doc = HeadDocument([_meta("a", "1"), _meta("b", "2")])
        doc.replace(_meta("a", "changed"))
        assert [e.key for e in doc] == ["meta[name=a]", "meta[name=b]"]
        assert doc.get("meta[name=a]").attrs["content"] == "changed"

    def test_render_escapes_attributes_and_title(self):
        doc = HeadDocument(
            [
                HeadElement(key="title", tag="title", text="Tips & <Tricks>"),
                _meta("description", 'say "hi"'),
            ]
        )
        rendered = doc.render_head()
        assert "<title>Tips &amp; &lt;Tricks&gt;</title>" in rendered
        assert '<meta name="description" content="say &quot;hi&quot;">' in rendered
        assert doc.title == "Tips & <Tricks>"

    def test_script_text_is_raw(self):
        element = HeadElement(key="#s", tag="script", text="if (a < b && c) {}")
        assert element.render() == "<script>if (a < b && c) {}</script>"

    def test_script_cannot_close_itself_early(self):
        element = HeadElement(key="#s", tag="script", text='{"x": "</script>"}')
        assert "</script>" not in element.render()[: -len("</script>")]

    def test_end_tag_match_ignores_case(self):
        element = HeadElement(key="#s", tag="script", text='{"x": "</Script><b>", "y": "</SCRIPT"}')
        inner = element.render()[: -len("</script>")]
        assert "</script" not in inner.lower()

    def test_body_elements_rendered_separately(self):
        doc = HeadDocument(
            [
                _meta("a", "1"),
                HeadElement(key="#ns", tag="noscript", text="x", placement=Placement.BODY),
            ]
        )
        assert "noscript" not in doc.render_head()
        assert doc.render_body_start() == "<noscript>x</noscript>"


class TestDiff:
    def test_diff_is_pure(self):
        doc = HeadDocument([_meta("a", "1")])
        before = doc.snapshot()
        patch = diff(doc.snapshot(), [_meta("a", "2"), _meta("b", "1")], ReconcilePolicy.UPSERT)
        assert not patch.is_empty
        assert doc.snapshot() == before

    def test_insert_only_never_updates(self):
        current = {"meta[name=a]": _meta("a", "1")}
        patch = diff(current, [_meta("a", "2"), _meta("b", "1")], ReconcilePolicy.INSERT_ONLY)
        assert patch.keys(OpKind.CREATE) == ["meta[name=b]"]
        assert patch.keys(OpKind.UPDATE) == []

    def test_upsert_updates_changed_only(self):
        current = {"meta[name=a]": _meta("a", "1"), "meta[name=b]": _meta("b", "1")}
        patch = diff(current, [_meta("a", "1"), _meta("b", "2")], ReconcilePolicy.UPSERT)
        assert patch.keys(OpKind.UPDATE) == ["meta[name=b]"]
        assert patch.keys(OpKind.REMOVE) == []

    def test_replace_removes_only_owned_leftovers(self):
        current = {
            "meta[name=a]": _meta("a", "1", owner="mine"),
            "meta[name=b]": _meta("b", "1", owner="mine"),
            "meta[name=c]": _meta("c", "1", owner="other"),
        }
        patch = diff(current, [_meta("a", "1", owner="mine")], ReconcilePolicy.REPLACE, "mine")
        assert patch.keys(OpKind.REMOVE) == ["meta[name=b]"]

    def test_replace_requires_owner(self):
        with pytest.raises(ValueError):
            diff({}, [], ReconcilePolicy.REPLACE)

    def test_last_duplicate_wins(self):
        patch = diff({}, [_meta("a", "1"), _meta("a", "2")], ReconcilePolicy.UPSERT)
        assert len(patch.ops) == 1
        assert patch.ops[0].element.attrs["content"] == "2"

    def test_identical_state_gives_empty_patch(self):
        desired = [_meta("a", "1"), _meta("b", "2")]
        doc = HeadDocument(desired)
        assert diff(doc.snapshot(), desired, ReconcilePolicy.UPSERT).is_empty


class TestApply:
    def test_apply_patch(self):
        doc = HeadDocument([_meta("a", "1", owner="x"), _meta("b", "1", owner="x")])
        patch = diff(
            doc.snapshot(),
            [_meta("a", "2", owner="x"), _meta("c", "1", owner="x")],
            ReconcilePolicy.REPLACE,
            owner="x",
        )
        apply_patch(doc, patch)
        assert [e.key for e in doc] == ["meta[name=a]", "meta[name=c]"]
        assert doc.get("meta[name=a]").attrs["content"] == "2"

    def test_reconcile_twice_is_idempotent(self):
        doc = HeadDocument()
        desired = [_meta("a", "1"), _meta("b", "2")]
        reconcile(doc, desired, ReconcilePolicy.UPSERT)
        second = reconcile(doc, desired, ReconcilePolicy.UPSERT)
        assert second.is_empty
        assert len(doc) == 2
