"""Tests for the built-in tools and the tool registry."""

import pytest

from voo._exceptions import DuplicateToolError
from voo.registry import ToolRegistry, default_registry
from voo.tools import ListFilesTool, ReadFileTool, validate_arguments
from voo.types.tool import ToolDescriptor, ToolErrorKind

from conftest import EchoTool


class TestReadFileTool:
    def test_reads_text(self, tmp_path):
        target = tmp_path / "notes.txt"
        target.write_text("hello\nworld\n", encoding="utf-8")

        result = ReadFileTool().execute({"path": str(target)})

        assert not result.is_error
        assert result.content == "hello\nworld\n"

    def test_missing_file(self, tmp_path):
        result = ReadFileTool().execute({"path": str(tmp_path / "missing.txt")})

        assert result.error_kind is ToolErrorKind.NOT_FOUND
        assert "missing.txt" in result.content

    def test_directory_is_invalid_argument(self, tmp_path):
        result = ReadFileTool().execute({"path": str(tmp_path)})

        assert result.error_kind in (
            ToolErrorKind.INVALID_ARGUMENT,
            ToolErrorKind.PERMISSION_DENIED,  # Windows reports EACCES here
        )

    def test_binary_file_is_invalid_argument(self, tmp_path):
        target = tmp_path / "blob.bin"
        target.write_bytes(b"\xff\xfe\x00\x81")

        result = ReadFileTool().execute({"path": str(target)})

        assert result.error_kind is ToolErrorKind.INVALID_ARGUMENT

    def test_root_allows_paths_inside(self, tmp_path):
        (tmp_path / "inside.txt").write_text("ok")

        result = ReadFileTool(root=tmp_path).execute({"path": "inside.txt"})

        assert result.content == "ok"

    def test_root_blocks_escape(self, tmp_path):
        sandbox = tmp_path / "sandbox"
        sandbox.mkdir()
        (tmp_path / "secret.txt").write_text("secret")

        result = ReadFileTool(root=sandbox).execute({"path": "../secret.txt"})

        assert result.error_kind is ToolErrorKind.PERMISSION_DENIED
        assert result.content != "secret"

    def test_without_root_paths_are_unrestricted(self, tmp_path):
        sandbox = tmp_path / "sandbox"
        sandbox.mkdir()
        (tmp_path / "outside.txt").write_text("reachable")

        result = ReadFileTool().execute({"path": str(sandbox / ".." / "outside.txt")})

        assert result.content == "reachable"


class TestListFilesTool:
    def test_lists_sorted_names_with_directory_marker(self, tmp_path):
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "a.txt").write_text("")
        (tmp_path / "sub").mkdir()

        result = ListFilesTool().execute({"path": str(tmp_path)})

        assert result.content == ["a.txt", "b.txt", "sub/"]

    def test_defaults_to_current_directory(self, tmp_path, monkeypatch):
        (tmp_path / "only.txt").write_text("")
        monkeypatch.chdir(tmp_path)

        result = ListFilesTool().execute({})

        assert result.content == ["only.txt"]

    def test_file_is_not_a_directory(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("")

        result = ListFilesTool().execute({"path": str(target)})

        assert result.error_kind is ToolErrorKind.INVALID_ARGUMENT

    def test_missing_directory(self, tmp_path):
        result = ListFilesTool().execute({"path": str(tmp_path / "nope")})

        assert result.error_kind is ToolErrorKind.NOT_FOUND

    def test_root_blocks_escape(self, tmp_path):
        sandbox = tmp_path / "sandbox"
        sandbox.mkdir()

        result = ListFilesTool(root=sandbox).execute({"path": ".."})

        assert result.error_kind is ToolErrorKind.PERMISSION_DENIED

    def test_root_itself_is_listable(self, tmp_path):
        (tmp_path / "x.txt").write_text("")

        result = ListFilesTool(root=tmp_path).execute({"path": "."})

        assert result.content == ["x.txt"]

    def test_rendered_payload_is_json(self, tmp_path):
        (tmp_path / "a.txt").write_text("")

        result = ListFilesTool().execute({"path": str(tmp_path)})

        assert result.render() == '["a.txt"]'


class TestValidation:
    @pytest.fixture
    def descriptor(self):
        return ToolDescriptor(
            name="t",
            description="",
            parameters={
                "type": "object",
                "properties": {
                    "path": {"type": "string"},
                    "count": {"type": "integer"},
                    "maybe": {"type": ["string", "null"]},
                },
                "required": ["path"],
                "additionalProperties": False,
            },
        )

    def test_accepts_valid_arguments(self, descriptor):
        assert validate_arguments({"path": "x", "count": 2, "maybe": None}, descriptor) is None

    def test_missing_required(self, descriptor):
        assert "path" in validate_arguments({}, descriptor)

    def test_wrong_type(self, descriptor):
        assert "count" in validate_arguments({"path": "x", "count": "2"}, descriptor)

    def test_bool_is_not_an_integer(self, descriptor):
        assert validate_arguments({"path": "x", "count": True}, descriptor) is not None

    def test_unexpected_argument(self, descriptor):
        assert "extra" in validate_arguments({"path": "x", "extra": 1}, descriptor)

    def test_non_mapping(self, descriptor):
        assert validate_arguments(["path"], descriptor) is not None

    def test_boolean_property_schema(self):
        descriptor = ToolDescriptor(name="t", description="", parameters={"properties": {"x": True}})

        assert validate_arguments({"x": 1}, descriptor) is None


class TestToolRegistry:
    def test_register_and_resolve(self):
        tool = EchoTool()
        registry = ToolRegistry()

        registry.register(tool)

        assert registry.resolve("echo") is tool
        assert registry.resolve("nope") is None
        assert "echo" in registry
        assert len(registry) == 1

    def test_duplicate_name_is_rejected(self):
        registry = ToolRegistry([EchoTool()])

        with pytest.raises(DuplicateToolError):
            registry.register(EchoTool())
        assert len(registry) == 1

    def test_descriptors_are_stable(self):
        registry = default_registry()

        first = registry.all_descriptors()
        second = registry.all_descriptors()

        assert first == second
        assert [d.name for d in first] == ["read_file", "list_files"]

    def test_descriptors_follow_registration_order(self):
        registry = ToolRegistry([ListFilesTool(), EchoTool()])

        assert registry.names() == ["list_files", "echo"]
        assert [d.name for d in registry.all_descriptors()] == ["list_files", "echo"]

    def test_iterates_tools_in_registration_order(self):
        first, second = ListFilesTool(), EchoTool()

        assert list(ToolRegistry([first, second])) == [first, second]


class TestToolDescriptor:
    def test_openai_format(self):
        descriptor = ReadFileTool().describe()

        payload = descriptor.to_openai()

        assert payload["type"] == "function"
        assert payload["function"]["name"] == "read_file"
        assert payload["function"]["parameters"]["required"] == ["path"]

    def test_anthropic_format(self):
        payload = ListFilesTool().describe().to_anthropic()

        assert payload["name"] == "list_files"
        assert payload["input_schema"]["type"] == "object"

    def test_parameters_are_read_only(self):
        descriptor = ReadFileTool().describe()

        with pytest.raises(TypeError):
            descriptor.parameters["type"] = "array"

    def test_nested_schema_is_read_only(self):
        descriptor = ToolRegistry([ReadFileTool()]).all_descriptors()[0]

        with pytest.raises(TypeError):
            descriptor.parameters["properties"]["path"]["type"] = "integer"
        assert ReadFileTool().describe().properties["path"]["type"] == "string"

    def test_schema_is_a_plain_copy(self):
        descriptor = ReadFileTool().describe()

        schema = descriptor.schema()
        schema["properties"]["path"]["type"] = "integer"

        assert isinstance(schema["required"], list)
        assert descriptor.properties["path"]["type"] == "string"
        assert ReadFileTool.parameters["properties"]["path"]["type"] == "string"
