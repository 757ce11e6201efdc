import pytest

from buildgen.blocks import Binary, Meta, Toolchain
from buildgen.config import ConfigError, ConfigProvider

CONFIG = """
kind: Toolchain
spec:
  image: golang:1.22-alpine
  setup:
    - apk add --no-cache make
---
kind: Binary
name: server
spec:
  buildCommand: go build -o /out/server ./cmd/server
  outputPath: /out/server
"""


def test_applies_matching_kind():
    provider = ConfigProvider.from_string(CONFIG)
    toolchain = Toolchain(Meta())

    provider.load(toolchain)

    assert toolchain.image == "golang:1.22-alpine"
    assert toolchain.setup == ["apk add --no-cache make"]


def test_named_document_only_matches_that_instance():
    provider = ConfigProvider.from_string(CONFIG)
    server = Binary(Meta(), "server")
    client = Binary(Meta(), "client")

    provider.load(server)
    provider.load(client)

    assert server.build_command == "go build -o /out/server ./cmd/server"
    assert server.output_path == "/out/server"
    assert client.build_command == "make -C src client"


def test_unset_fields_keep_block_defaults():
    provider = ConfigProvider.from_string("kind: Binary\nspec:\n  outputPath: /bin/x\n")
    binary = Binary(Meta(), "x")

    provider.load(binary)

    assert binary.output_path == "/bin/x"
    assert binary.build_command == "make -C src x"


def test_later_documents_win():
    provider = ConfigProvider.from_string(
        "kind: Toolchain\nspec:\n  image: a\n---\nkind: Toolchain\nspec:\n  image: b\n"
    )
    toolchain = Toolchain(Meta())

    provider.load(toolchain)

    assert toolchain.image == "b"


def test_project_document_fills_meta():
    provider = ConfigProvider.from_string(
        "kind: Project\nspec:\n  name: demo\n  mainBranch: trunk\n  binaries: [server]\n"
    )
    meta = Meta()

    provider.load(meta)

    assert meta.name == "demo"
    assert meta.main_branch == "trunk"
    assert meta.binaries == ["server"]


def test_nodes_without_config_are_skipped():
    class Plain:
        name = "plain"

    ConfigProvider.from_string(CONFIG).load(Plain())


def test_unknown_key_rejected():
    provider = ConfigProvider.from_string("kind: Toolchain\nspec:\n  imag: typo\n")

    with pytest.raises(ConfigError, match="Toolchain"):
        provider.load(Toolchain(Meta()))


def test_wrong_type_rejected():
    provider = ConfigProvider.from_string("kind: Toolchain\nspec:\n  setup: 3\n")

    with pytest.raises(ConfigError):
        provider.load(Toolchain(Meta()))


def test_missing_spec_rejected():
    provider = ConfigProvider.from_string("kind: Toolchain\n")

    with pytest.raises(ConfigError, match="Missing spec"):
        provider.load(Toolchain(Meta()))


def test_name_for_unnamed_block_rejected():
    provider = ConfigProvider.from_string("kind: Project\nname: other\nspec: {}\n")

    with pytest.raises(ConfigError, match="doesn't support names"):
        provider.load(Meta())


def test_malformed_documents_rejected():
    with pytest.raises(ConfigError, match="must be a mapping"):
        ConfigProvider.from_string("- just\n- a list\n")

    with pytest.raises(ConfigError, match="Invalid document"):
        ConfigProvider.from_string("kind: Toolchain\nextra: true\n")

    with pytest.raises(ConfigError, match="Failed to parse"):
        ConfigProvider.from_string("kind: [unclosed\n")


def test_missing_file_means_defaults(tmp_path):
    provider = ConfigProvider.from_file(tmp_path / "absent.yaml")

    assert provider.documents == []


def test_from_file(tmp_path):
    path = tmp_path / ".buildgen.yaml"
    path.write_text(CONFIG)

    provider = ConfigProvider.from_file(path)

    assert [doc.kind for doc in provider.documents] == ["Toolchain", "Binary"]
    assert provider.source == str(path)
