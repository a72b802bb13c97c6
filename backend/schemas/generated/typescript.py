"""
TypeScript projection of the OpenAPI document.

Reads nothing but the published OpenAPI document (a plain dict) and emits one
``.ts`` module containing:

- ``components``: one entry per ``components.schemas`` schema, plus a named
  alias for each (``export type PersonResponse = ...``)
- ``paths`` and ``operations``: openapi-typescript compatible lookups, so
  ``paths["/people"]["get"]["responses"]["200"]["content"]["application/json"]``
  type-checks
- per operation a request shape and a result union tagged by ``ok`` and
  ``status``
- ``createApiClient(baseUrl, fetch?)`` implementing every operation with fetch

Output is deterministic: paths, methods and schemas are emitted in sorted or
fixed order.
"""

import json
import re
from typing import Any

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
PARAMETER_LOCATIONS = ("query", "header", "path", "cookie")
JSON_MEDIA_TYPE = "application/json"
REF_PREFIX = "#/components/schemas/"
INDENT = "  "

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_WORD = re.compile(r"[A-Za-z0-9]+")

HEADER = """\
/**
 * Generated from the OpenAPI document by
 * `python -m backend.schemas.generated.export_schemas`. Do not edit by hand.
 */
"""

RUNTIME = """\
export type FetchLike = (input: string, init?: RequestInit) => Promise<Response>;

type QueryValue = string | number | boolean | null | undefined;

interface RawRequest {
  path?: Record<string, string | number>;
  query?: Record<string, QueryValue>;
  body?: unknown;
}

function buildUrl(baseUrl: string, template: string, request: RawRequest): string {
  let path = template;
  for (const [key, value] of Object.entries(request.path ?? {})) {
    path = path.replace(`{${key}}`, encodeURIComponent(String(value)));
  }
  const search = new URLSearchParams();
  for (const [key, value] of Object.entries(request.query ?? {})) {
    if (value !== undefined && value !== null) {
      search.append(key, String(value));
    }
  }
  const queryString = search.toString();
  return `${baseUrl}${path}${queryString ? `?${queryString}` : ""}`;
}

async function readBody(response: Response): Promise<unknown> {
  const text = await response.text();
  if (!text) {
    return null;
  }
  try {
    return JSON.parse(text);
  } catch {
    return text;
  }
}

async function send<T>(
  fetchImpl: FetchLike,
  baseUrl: string,
  method: string,
  template: string,
  request: RawRequest,
): Promise<T> {
  const hasBody = request.body !== undefined;
  const response = await fetchImpl(buildUrl(baseUrl, template, request), {
    method,
    headers: hasBody ? { "Content-Type": "application/json" } : undefined,
    body: hasBody ? JSON.stringify(request.body) : undefined,
  });
  const payload = await readBody(response);
  const result = response.ok
    ? { ok: true, status: response.status, data: payload }
    : { ok: false, status: response.status, error: payload };
  return result as unknown as T;
}
"""


def _literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _property_key(name: str) -> str:
    return name if _IDENTIFIER.match(name) else _literal(name)


def _pascal_case(value: str) -> str:
    words = _WORD.findall(value)
    return "".join(word[0].upper() + word[1:] for word in words) or "Operation"


def _camel_case(value: str) -> str:
    if _IDENTIFIER.match(value) and "$" not in value:
        return value[0].lower() + value[1:]
    pascal = _pascal_case(value)
    return pascal[0].lower() + pascal[1:]


def _union(types: list[str]) -> str:
    unique = list(dict.fromkeys(types))
    if "unknown" in unique:
        return "unknown"
    return " | ".join(unique) if unique else "never"


def _wrap(type_: str) -> str:
    # Compound types need parentheses before [] or &
    if (" | " in type_ or " & " in type_) and not type_.startswith("{"):
        return f"({type_})"
    return type_


def _doc_comment(text: str | None, pad: str) -> list[str]:
    if not text:
        return []
    text = " ".join(text.split()).replace("*/", "*\\/")
    return [f"{pad}/** {text} */"]


def _status_key(status: str) -> str:
    return status if status.isdigit() else _literal(status)


class TypeScriptProjector:
    """Render an OpenAPI 3 document as a TypeScript module."""

    def __init__(self, document: dict[str, Any]):
        self.document = document
        self.schemas: dict[str, Any] = document.get("components", {}).get("schemas", {})

    # ------------------------------------------------------------------
    # Schema -> type expression
    # ------------------------------------------------------------------

    def ref(self, ref: str) -> str:
        if not ref.startswith(REF_PREFIX):
            return "unknown"
        return f'components["schemas"][{_literal(ref[len(REF_PREFIX):])}]'

    def type_of(self, schema: dict[str, Any] | bool | None, level: int = 0) -> str:
        """TypeScript type expression for a JSON schema."""
        if schema is True or not schema:
            return "unknown"
        if "$ref" in schema:
            return self.ref(schema["$ref"])
        if "const" in schema:
            return _literal(schema["const"])
        if "enum" in schema:
            return _union([_literal(value) for value in schema["enum"]])
        for key in ("anyOf", "oneOf"):
            if key in schema:
                return _union([self.type_of(option, level) for option in schema[key]])
        if "allOf" in schema:
            parts = [self.type_of(part, level) for part in schema["allOf"]]
            return parts[0] if len(parts) == 1 else " & ".join(_wrap(p) for p in parts)

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            return _union(
                [self.type_of({**schema, "type": item}, level) for item in schema_type]
            )

        if schema_type == "string":
            type_ = "string"
        elif schema_type in ("integer", "number"):
            type_ = "number"
        elif schema_type == "boolean":
            type_ = "boolean"
        elif schema_type == "null":
            type_ = "null"
        elif schema_type == "array":
            type_ = f"{_wrap(self.type_of(schema.get('items'), level))}[]"
        elif schema_type == "object" or "properties" in schema:
            type_ = self.object_type(schema, level)
        else:
            type_ = "unknown"

        # OpenAPI 3.0 style
        if schema.get("nullable") and type_ != "unknown":
            return _union([type_, "null"])
        return type_

    def object_type(self, schema: dict[str, Any], level: int) -> str:
        properties: dict[str, Any] = schema.get("properties", {})
        required = set(schema.get("required", []))
        additional = schema.get("additionalProperties")

        if not properties and not additional:
            return "Record<string, unknown>"

        pad = INDENT * (level + 1)
        lines = ["{"]
        for name, prop in properties.items():
            optional = "" if name in required else "?"
            lines.extend(_doc_comment(prop.get("description"), pad))
            lines.append(
                f"{pad}{_property_key(name)}{optional}: {self.type_of(prop, level + 1)};"
            )
        if additional:
            value = self.type_of(additional if isinstance(additional, dict) else None, level + 1)
            lines.append(f"{pad}[key: string]: {value};")
        lines.append(f"{INDENT * level}}}")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def operations(self) -> list[tuple[str, str, str, dict[str, Any]]]:
        """(name, method, path, operation) in path then method order."""
        found = []
        for path in sorted(self.document.get("paths", {})):
            item = self.document["paths"][path]
            for method in HTTP_METHODS:
                operation = item.get(method)
                if operation is None:
                    continue
                operation_id = operation.get("operationId") or f"{method} {path}"
                found.append((_camel_case(operation_id), method, path, operation))
        return found

    def parameters_by_location(self, operation: dict[str, Any]) -> dict[str, list[dict]]:
        grouped: dict[str, list[dict]] = {}
        for param in operation.get("parameters", []):
            grouped.setdefault(param.get("in", "query"), []).append(param)
        return grouped

    def parameter_group(self, params: list[dict[str, Any]], level: int) -> str:
        pad = INDENT * (level + 1)
        lines = ["{"]
        for param in params:
            optional = "" if param.get("required") else "?"
            schema = param.get("schema") or {}
            lines.extend(
                _doc_comment(param.get("description") or schema.get("description"), pad)
            )
            lines.append(
                f"{pad}{_property_key(param['name'])}{optional}: "
                f"{self.type_of(schema, level + 1)};"
            )
        lines.append(f"{INDENT * level}}}")
        return "\n".join(lines)

    def body_type(self, operation: dict[str, Any], level: int) -> tuple[str, bool] | None:
        body = operation.get("requestBody")
        if not body:
            return None
        content = body.get("content", {})
        if JSON_MEDIA_TYPE in content:
            type_ = self.type_of(content[JSON_MEDIA_TYPE].get("schema"), level)
        else:
            type_ = "unknown"
        return type_, bool(body.get("required"))

    def response_type(self, response: dict[str, Any], level: int) -> str:
        content = response.get("content")
        if not content:
            return "null"
        if JSON_MEDIA_TYPE in content:
            return self.type_of(content[JSON_MEDIA_TYPE].get("schema"), level)
        return "unknown"

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def render_components(self) -> list[str]:
        lines = ["export interface components {", f"{INDENT}schemas: {{"]
        for name in sorted(self.schemas):
            schema = self.schemas[name]
            lines.extend(_doc_comment(schema.get("description"), INDENT * 2))
            lines.append(f"{INDENT * 2}{_property_key(name)}: {self.type_of(schema, 2)};")
        lines.extend([f"{INDENT}}};", "}", ""])

        for name in sorted(self.schemas):
            alias = _pascal_case(name) if not _IDENTIFIER.match(name) else name
            if alias in ("components", "paths", "operations"):
                continue
            lines.append(
                f'export type {alias} = components["schemas"][{_literal(name)}];'
            )
        lines.append("")
        return lines

    def render_paths(self) -> list[str]:
        lines = ["export interface paths {"]
        for path in sorted(self.document.get("paths", {})):
            lines.append(f"{INDENT}{_literal(path)}: {{")
            for name, method, op_path, _ in self.operations():
                if op_path == path:
                    lines.append(f"{INDENT * 2}{method}: operations[{_literal(name)}];")
            lines.append(f"{INDENT}}};")
        lines.extend(["}", ""])
        return lines

    def render_operations(self) -> list[str]:
        lines = ["export interface operations {"]
        for name, _, _, operation in self.operations():
            lines.extend(_doc_comment(operation.get("summary"), INDENT))
            lines.append(f"{INDENT}{_property_key(name)}: {{")

            # parameters
            grouped = self.parameters_by_location(operation)
            lines.append(f"{INDENT * 2}parameters: {{")
            for location in PARAMETER_LOCATIONS:
                params = grouped.get(location)
                if not params:
                    lines.append(f"{INDENT * 3}{location}?: never;")
                    continue
                optional = "" if any(p.get("required") for p in params) else "?"
                lines.append(
                    f"{INDENT * 3}{location}{optional}: {self.parameter_group(params, 3)};"
                )
            lines.append(f"{INDENT * 2}}};")

            # requestBody
            body = operation.get("requestBody")
            if not body:
                lines.append(f"{INDENT * 2}requestBody?: never;")
            else:
                optional = "" if body.get("required") else "?"
                lines.append(f"{INDENT * 2}requestBody{optional}: {{")
                lines.append(f"{INDENT * 3}content: {{")
                for media_type in sorted(body.get("content", {})):
                    schema = body["content"][media_type].get("schema")
                    lines.append(
                        f"{INDENT * 4}{_literal(media_type)}: {self.type_of(schema, 4)};"
                    )
                lines.append(f"{INDENT * 3}}};")
                lines.append(f"{INDENT * 2}}};")

            # responses
            lines.append(f"{INDENT * 2}responses: {{")
            for status in sorted(operation.get("responses", {})):
                response = operation["responses"][status]
                lines.extend(_doc_comment(response.get("description"), INDENT * 3))
                lines.append(f"{INDENT * 3}{_status_key(status)}: {{")
                content = response.get("content")
                if not content:
                    lines.append(f"{INDENT * 4}content?: never;")
                else:
                    lines.append(f"{INDENT * 4}content: {{")
                    for media_type in sorted(content):
                        schema = content[media_type].get("schema")
                        lines.append(
                            f"{INDENT * 5}{_literal(media_type)}: {self.type_of(schema, 5)};"
                        )
                    lines.append(f"{INDENT * 4}}};")
                lines.append(f"{INDENT * 3}}};")
            lines.append(f"{INDENT * 2}}};")
            lines.append(f"{INDENT}}};")
        lines.extend(["}", ""])
        return lines

    def request_fields(self, operation: dict[str, Any]) -> list[tuple[str, bool, str]]:
        """(field, required, type) of the client request shape."""
        fields = []
        grouped = self.parameters_by_location(operation)
        for location in ("path", "query", "header"):
            params = grouped.get(location)
            if params:
                required = any(p.get("required") for p in params)
                fields.append((location, required, self.parameter_group(params, 1)))
        body = self.body_type(operation, 1)
        if body is not None:
            fields.append(("body", body[1], body[0]))
        return fields

    def result_members(self, operation: dict[str, Any]) -> list[str]:
        members = []
        for status in sorted(operation.get("responses", {})):
            response = operation["responses"][status]
            status_type = status if status.isdigit() else "number"
            payload = self.response_type(response, 1)
            if status.startswith("2"):
                members.append(f"{{ ok: true; status: {status_type}; data: {payload} }}")
            else:
                members.append(f"{{ ok: false; status: {status_type}; error: {payload} }}")
        return members

    def render_client(self) -> list[str]:
        lines: list[str] = []
        signatures: list[str] = []
        implementations: list[str] = []

        for name, method, path, operation in self.operations():
            type_name = _pascal_case(name)
            fields = self.request_fields(operation)
            members = self.result_members(operation) or [
                "{ ok: boolean; status: number; data?: unknown; error?: unknown }"
            ]

            if fields:
                lines.append(f"export interface {type_name}Request {{")
                for field, required, type_ in fields:
                    lines.append(f"{INDENT}{field}{'' if required else '?'}: {type_};")
                lines.extend(["}", ""])

            lines.append(f"export type {type_name}Result =")
            for i, member in enumerate(members):
                end = ";" if i == len(members) - 1 else ""
                lines.append(f"{INDENT}| {member}{end}")
            lines.append("")

            signatures.extend(_doc_comment(operation.get("summary"), INDENT))
            if not fields:
                signatures.append(f"{INDENT}{name}(): Promise<{type_name}Result>;")
                call = f"() =>\n{INDENT * 3}send<{type_name}Result>(fetchImpl, base, {_literal(method.upper())}, {_literal(path)}, {{}})"
            else:
                optional = not any(required for _, required, _ in fields)
                param = (
                    f"request: {type_name}Request = {{}}"
                    if optional
                    else f"request: {type_name}Request"
                )
                signatures.append(
                    f"{INDENT}{name}(request{'?' if optional else ''}: {type_name}Request): "
                    f"Promise<{type_name}Result>;"
                )
                call = (
                    f"({param}) =>\n{INDENT * 3}send<{type_name}Result>(fetchImpl, base, "
                    f"{_literal(method.upper())}, {_literal(path)}, request)"
                )
            implementations.append(f"{INDENT * 2}{name}: {call},")

        lines.append("export interface ApiClient {")
        lines.extend(signatures)
        lines.extend(["}", ""])
        lines.append(RUNTIME)
        lines.append("export function createApiClient(")
        lines.append(f"{INDENT}baseUrl: string,")
        lines.append(f"{INDENT}fetchImpl: FetchLike = (input, init) => fetch(input, init),")
        lines.append("): ApiClient {")
        lines.append(f'{INDENT}const base = baseUrl.replace(/\\/+$/, "");')
        lines.append(f"{INDENT}return {{")
        lines.extend(implementations)
        lines.append(f"{INDENT}}};")
        lines.append("}")
        return lines

    def render(self) -> str:
        lines = [HEADER]
        lines.extend(self.render_components())
        lines.extend(self.render_paths())
        lines.extend(self.render_operations())
        lines.extend(self.render_client())
        return "\n".join(lines).rstrip("\n") + "\n"


def generate_typescript(document: dict[str, Any]) -> str:
    """Render ``document`` (an OpenAPI dict) as a TypeScript module."""
    return TypeScriptProjector(document).render()


__all__ = ["TypeScriptProjector", "generate_typescript"]
