"""
Type converter from tree-sitter Go nodes to type shapes.

Expression forms outside the supported grammar (generic instantiations,
type unions, approximation constraints, variadic parameters) convert to
None and the enclosing field or declaration is dropped. Recognizable but
malformed forms raise ConversionError.
"""

from __future__ import annotations

from tree_sitter import Node

from ..errors import ConversionError
from ..model.nodes import (
    ELLIPSIS_SIZE,
    SLICE_SIZE,
    ArrayType,
    ChannelDir,
    ChannelType,
    Field,
    FunctionType,
    InterfaceType,
    MapType,
    NativeType,
    NonNativeType,
    PointerType,
    StructType,
    TypeShape,
)
from ..tags import TagSet, scan_tags
from ..utils import get_identifier_parts, is_native_type, parse_int_literal, unquote_char


def guess_implicit_name(typ: TypeShape | None) -> str:
    """Name under which an embedded member is promoted.

    Examples:
        int -> "int"
        pkg.Name -> "Name"
        *pkg.Name -> "Name"
        map[string]int -> ""
    """
    if isinstance(typ, NativeType):
        return typ.name
    if isinstance(typ, NonNativeType):
        _, name = get_identifier_parts(typ.name)
        return name
    if isinstance(typ, ArrayType):
        return guess_implicit_name(typ.value_type)
    if isinstance(typ, PointerType):
        return guess_implicit_name(typ.to_type)
    if isinstance(typ, ChannelType):
        return guess_implicit_name(typ.value_type)
    return ""


def named_children(node: Node) -> list[Node]:
    """Named children of a node, without comments."""
    return [child for child in node.named_children if child.type != "comment"]


class TypeConverter:
    """Converts type expression nodes of one source file."""

    def __init__(self, source: bytes):
        """
        Initialize the converter.

        Args:
            source: The UTF-8 source the nodes were parsed from
        """
        self.source = source

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def convert(self, node: Node) -> TypeShape | None:
        """
        Convert a type expression node.

        Args:
            node: tree-sitter node of a Go type expression

        Returns:
            The matching type shape, or None if the expression is not supported

        Raises:
            ConversionError: If the expression is malformed
        """
        node_type = node.type

        if node_type == "parenthesized_type":
            return self._parse_single_child(node)
        if node_type == "type_identifier":
            return self._parse_ident(node)
        if node_type == "qualified_type":
            return self._parse_qualified(node)
        if node_type == "struct_type":
            return self._parse_struct(node)
        if node_type == "interface_type":
            return self._parse_interface(node)
        if node_type == "map_type":
            return self._parse_map(node)
        if node_type in ("array_type", "slice_type", "implicit_length_array_type"):
            return self._parse_array(node)
        if node_type == "pointer_type":
            return self._parse_pointer(node)
        if node_type == "channel_type":
            return self._parse_channel(node)
        if node_type == "function_type":
            return self._parse_function(node)
        if node_type in ("type_elem", "type_constraint"):
            # A single type, unions are not supported
            return self._parse_single_child(node)

        # Not supported
        return None

    def _parse_single_child(self, node: Node) -> TypeShape | None:
        children = named_children(node)
        if len(children) != 1:
            return None
        return self.convert(children[0])

    def _parse_ident(self, node: Node) -> TypeShape:
        name = self.text(node)
        if is_native_type(name):
            return NativeType(name=name)
        return NonNativeType(name=name)

    def _parse_qualified(self, node: Node) -> NonNativeType:
        package = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        if package is None or name is None:
            raise ConversionError(f"unable to split qualified name '{self.text(node)}'")
        return NonNativeType(name=f"{self.text(package)}.{self.text(name)}")

    def _parse_struct(self, node: Node) -> StructType:
        field_nodes = []
        for child in named_children(node):
            if child.type == "field_declaration_list":
                field_nodes = [fd for fd in child.named_children if fd.type == "field_declaration"]

        fields = []
        for field_node in field_nodes:
            fld = self._parse_struct_field(field_node)
            if fld is not None:
                fields.append(fld)
        return StructType(fields=fields)

    def _parse_struct_field(self, node: Node) -> Field | None:
        names = [self.text(name) for name in node.children_by_field_name("name")]

        tags = TagSet()
        tag_node = node.child_by_field_name("tag")
        if tag_node is not None:
            # Remove the surrounding quotes, the content is not unescaped
            tags = scan_tags(self.text(tag_node)[1:-1])

        type_node = node.child_by_field_name("type")
        if type_node is None:
            return None

        # Embedded *T has an anonymous star token before the type
        embedded_pointer = not names and any(child.type == "*" for child in node.children)
        return self.build_field(names, type_node, tags, embedded_pointer)

    def _parse_interface(self, node: Node) -> InterfaceType:
        methods = []
        for child in named_children(node):
            if child.type == "method_elem":
                name = child.child_by_field_name("name")
                method = Field(
                    names=[self.text(name)] if name is not None else [],
                    type=self._parse_signature(child),
                )
                if not method.names:
                    method.implicit_name = guess_implicit_name(method.type)
                methods.append(method)
            elif child.type == "type_elem":
                fld = self.build_field([], child)
                if fld is not None:
                    methods.append(fld)

        return InterfaceType(methods=methods, incomplete=node.has_error)

    def _parse_map(self, node: Node) -> MapType:
        key = node.child_by_field_name("key")
        value = node.child_by_field_name("value")
        return MapType(
            key_type=self.convert(key) if key is not None else None,
            value_type=self.convert(value) if value is not None else None,
        )

    def _parse_array(self, node: Node) -> ArrayType | None:
        element = node.child_by_field_name("element")
        value_type = self.convert(element) if element is not None else None
        if value_type is None:
            return None

        if node.type == "slice_type":
            return ArrayType(size=SLICE_SIZE, value_type=value_type)
        if node.type == "implicit_length_array_type":
            return ArrayType(size=ELLIPSIS_SIZE, value_type=value_type)

        length = node.child_by_field_name("length")
        if length is None:
            raise ConversionError(f"missing array length in '{self.text(node)}'")
        size, parsed_int = self._parse_array_length(length)
        return ArrayType(size=size, parsed_int=parsed_int, value_type=value_type)

    def _parse_array_length(self, node: Node) -> tuple[str, int | None]:
        """Return the textual array length and its value when it is a literal."""
        if node.type == "selector_expression":
            operand = node.child_by_field_name("operand")
            fld = node.child_by_field_name("field")
            if operand is not None and fld is not None and operand.type == "identifier":
                return f"{self.text(operand)}.{self.text(fld)}", None

        if node.type == "int_literal":
            literal = self.text(node)
            return literal, parse_int_literal(literal)

        if node.type == "rune_literal":
            literal = self.text(node)
            try:
                return literal, unquote_char(literal)
            except ValueError:
                return literal, None

        # Identifiers, other literals and any other expression as written
        return self.text(node), None

    def _parse_pointer(self, node: Node) -> PointerType:
        children = named_children(node)
        to_type = self.convert(children[0]) if children else None
        if to_type is None:
            raise ConversionError(f"unsupported pointer to unknown type '{self.text(node)}'")
        return PointerType(to_type=to_type)

    def _parse_channel(self, node: Node) -> ChannelType:
        tokens = [child.type for child in node.children[:2]]
        if tokens and tokens[0] == "<-":
            direction = ChannelDir.RECV
        elif len(tokens) > 1 and tokens[1] == "<-":
            direction = ChannelDir.SEND
        else:
            direction = ChannelDir.BOTH

        value = node.child_by_field_name("value")
        value_type = self.convert(value) if value is not None else None
        if value_type is None:
            raise ConversionError(f"unsupported channel type '{self.text(node)}'")
        return ChannelType(dir=direction, value_type=value_type)

    def _parse_function(self, node: Node) -> FunctionType:
        return self._parse_signature(node)

    def _parse_signature(self, node: Node) -> FunctionType:
        """Build a FunctionType from a node with parameters/result fields."""
        function = FunctionType()

        type_params = node.child_by_field_name("type_parameters")
        if type_params is not None:
            function.type_params = self.parse_parameter_list(type_params)

        params = node.child_by_field_name("parameters")
        if params is not None:
            function.params = self.parse_parameter_list(params)

        result = node.child_by_field_name("result")
        if result is not None:
            if result.type == "parameter_list":
                function.results = self.parse_parameter_list(result)
            else:
                fld = self.build_field([], result)
                function.results = [fld] if fld is not None else []

        return function

    def parse_parameter_list(self, node: Node) -> list[Field]:
        """Convert a parameter or type parameter list, dropping unsupported entries."""
        fields = []
        for child in named_children(node):
            if child.type not in ("parameter_declaration", "type_parameter_declaration"):
                # Variadic parameters are ellipsis expressions, not supported
                continue
            type_node = child.child_by_field_name("type")
            if type_node is None:
                continue
            names = [self.text(name) for name in child.children_by_field_name("name")]
            fld = self.build_field(names, type_node)
            if fld is not None:
                fields.append(fld)
        return fields

    def build_field(
        self,
        names: list[str],
        type_node: Node,
        tags: TagSet | None = None,
        embedded_pointer: bool = False,
    ) -> Field | None:
        """
        Build a field from its names and type node.

        Args:
            names: Declared names, empty for embedded members
            type_node: Node of the field type
            tags: Parsed field tags
            embedded_pointer: Whether the embedded member is written as *T

        Returns:
            The field, or None if its type is not supported
        """
        field_type = self.convert(type_node)
        if embedded_pointer:
            if field_type is None:
                raise ConversionError(f"unsupported pointer to unknown type '*{self.text(type_node)}'")
            field_type = PointerType(to_type=field_type)
        if field_type is None:
            return None

        fld = Field(names=names, type=field_type, tags=tags if tags is not None else TagSet())
        if not names:
            fld.implicit_name = guess_implicit_name(field_type)
        return fld
