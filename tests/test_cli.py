import json
from pathlib import Path

import pytest

from ltree.cli import _build_parser
from ltree.nodes import node_to_dict

from tests.infrastructure import fn, jload, obj, param, run_cli, s, src, tpl, write


pytestmark = pytest.mark.usefixtures("skip_if_no_tree_sitter")

EN = src("""
    import type { Locale } from "~/locales/types";

    export default {
        title: "Title",
        nav: {
            home: "Home",
        },
        greet: (name: string) => `Hi ${name}`,
    } satisfies Locale;
""")

DE = src("""
    export default {
        title: "Titel",
    };
""")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write(tmp_path / "en-US" / "translation.ts", EN)
    write(tmp_path / "de-DE" / "translation.ts", DE)
    return tmp_path


def _tree_file(root: Path, name: str, tree) -> str:
    write(root / name, json.dumps(node_to_dict(tree)))
    return name


def test_parser_flags():
    ns = _build_parser().parse_args(["--debug", "set", "t.json", "a.b", "--delete"])
    assert ns.debug is True
    assert ns.cmd == "set"
    assert ns.delete is True
    assert ns.node is None


def test_version(tmp_path: Path):
    cp = run_cli(tmp_path, "--version")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout.startswith("ltree ")


def test_parse(project: Path):
    cp = run_cli(project, "parse", "en-US/translation.ts")
    assert cp.returncode == 0, cp.stderr

    tree = jload(cp.stdout)
    assert [e["key"] for e in tree["entries"]] == ["title", "nav", "greet"]
    assert tree["entries"][2] == {
        "key": "greet",
        "type": "function",
        "params": [{"name": "name", "type": "string"}],
        "body": {"type": "string_template", "value": "Hi ${name}"},
    }


def test_parse_missing_file(project: Path):
    cp = run_cli(project, "parse", "fr-FR/translation.ts")
    assert cp.returncode == 2
    assert "File not found" in cp.stderr


def test_align_against_existing_and_missing_locale(project: Path):
    cp = run_cli(project, "align", "en-US/translation.ts", "de-DE/translation.ts", "--hide-translated")
    assert cp.returncode == 0, cp.stderr
    events = jload(cp.stdout)
    assert [(e["event"], e["key"]) for e in events] == [
        ("object_start", "nav"),
        ("entry", "home"),
        ("object_end", "nav"),
        ("entry", "greet"),
    ]
    assert events[1]["path"] == ["nav", "home"]
    assert events[3]["edit"]["body"] == {"type": "string_template", "value": ""}

    cp = run_cli(project, "align", "en-US/translation.ts", "fr-FR/translation.ts")
    assert cp.returncode == 0, cp.stderr
    entries = [e for e in jload(cp.stdout) if e["event"] == "entry"]
    assert entries[0]["edit"] == {"type": "string", "value": ""}


def test_set_and_delete(project: Path):
    tree = _tree_file(project, "tree.json", obj(nav=obj(home=s("Start"))))

    cp = run_cli(project, "set", tree, "nav.about", "--node", '{"type": "string", "value": "Über"}')
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == node_to_dict(obj(nav=obj(home=s("Start"), about=s("Über"))))

    cp = run_cli(project, "set", "-", "nav.home", "--delete", stdin=(project / tree).read_text(encoding="utf-8"))
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == node_to_dict(obj())


@pytest.mark.parametrize(
    "node, message",
    [
        ("{not json", "Expecting property name"),
        ('{"type": "block", "text": "x"}', "block bodies are only allowed inside functions"),
        ('{"type": "number", "value": 1}', "unknown node type"),
    ],
)
def test_set_rejects_bad_nodes(project: Path, node, message):
    tree = _tree_file(project, "tree.json", obj())

    cp = run_cli(project, "set", tree, "a", "--node", node)
    assert cp.returncode == 2
    assert message in cp.stderr


def test_merge(project: Path):
    draft = _tree_file(project, "draft.json", obj(nav=obj(home=s("Startseite"))))

    cp = run_cli(project, "merge", "de-DE/translation.ts", draft)
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == node_to_dict(obj(title=s("Titel"), nav=obj(home=s("Startseite"))))


def test_assemble_new_locale_from_builtin_template(project: Path):
    tree = _tree_file(project, "tree.json", obj(
        title=s("Titre"),
        greet=fn(tpl("Salut ${name}"), param("name", "string")),
    ))

    cp = run_cli(project, "assemble", "en-US/translation.ts", tree, "-o", "fr-FR.ts")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == ""
    assert (project / "fr-FR.ts").read_text(encoding="utf-8") == src("""
        import type { Locale } from "~/locales/types";

        export default {
            title: "Titre",
            greet: (name: string) => `Salut ${name}`,
        } satisfies Locale;
    """)


def test_assemble_into_existing_file_with_config(project: Path):
    write(project / "ltree.yaml", "assembly:\n  indent: 2\n")
    tree = _tree_file(project, "tree.json", obj(title=s("Titel"), nav=obj(home=s("Start"))))

    cp = run_cli(project, "assemble", "en-US/translation.ts", tree, "--existing", "de-DE/translation.ts")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == 'export default {\n  title: "Titel",\n  nav: {\n    home: "Start",\n  },\n};\n'


def test_assemble_structured(project: Path):
    write(project / "en.json", '{"b": "B", "a": "A"}')
    tree = _tree_file(project, "tree.json", obj(a=s("1"), b=s("2")))

    cp = run_cli(project, "assemble", "en.json", tree)
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == '{\n    "b": "2",\n    "a": "1"\n}'


def test_assemble_failure(project: Path):
    write(project / "ltree.yaml", "assembly:\n  fallback_template: null\n")
    tree = _tree_file(project, "tree.json", obj(title=s("x")))

    cp = run_cli(project, "assemble", "en-US/translation.ts", tree, "--name", "messages.ts")
    assert cp.returncode == 2
    assert "No assembling template found for file messages.ts" in cp.stderr
    assert "Failed to assemble messages.ts" in cp.stderr


def test_invalid_config(project: Path):
    write(project / "ltree.yaml", "schema_version: 7\n")

    cp = run_cli(project, "parse", "en-US/translation.ts")
    assert cp.returncode == 2
    assert "Unsupported config schema 7" in cp.stderr


def test_draft_lifecycle(project: Path):
    draft = _tree_file(project, "draft.json", obj(nav=obj(home=s("Start"))))

    cp = run_cli(project, "draft", "show", "de-DE", "translation.ts")
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) is None

    cp = run_cli(project, "draft", "save", "de-DE", "translation.ts", draft)
    assert jload(cp.stdout) == {"saved": True}
    assert (project / ".ltree-drafts" / "de-DE" / "translation.ts.json").is_file()

    # the draft is folded over the file before aligning
    cp = run_cli(project, "align", "en-US/translation.ts", "de-DE/translation.ts", "--draft", "de-DE", "--hide-translated")
    assert cp.returncode == 0, cp.stderr
    assert [e["key"] for e in jload(cp.stdout)] == ["greet"]

    cp = run_cli(project, "draft", "clear", "de-DE", "translation.ts")
    assert jload(cp.stdout) == {"cleared": True}
    cp = run_cli(project, "draft", "show", "de-DE", "translation.ts")
    assert jload(cp.stdout) is None


def test_draft_save_of_empty_tree_clears(project: Path):
    empty = _tree_file(project, "empty.json", obj(title=s("")))

    cp = run_cli(project, "draft", "save", "de-DE", "translation.ts", empty)
    assert cp.returncode == 0, cp.stderr
    assert jload(cp.stdout) == {"saved": False}


def test_draft_save_needs_tree(project: Path):
    cp = run_cli(project, "draft", "save", "de-DE", "translation.ts")
    assert cp.returncode == 2
    assert "needs a tree" in cp.stderr


def test_json_output_is_compact_and_keeps_non_ascii(tmp_path: Path):
    write(tmp_path / "de.json", '{"hello": "Grüße"}')

    cp = run_cli(tmp_path, "parse", "de.json")
    assert cp.returncode == 0, cp.stderr
    assert cp.stdout == '{"type": "object", "entries": [{"key": "hello", "type": "string", "value": "Grüße"}]}'
