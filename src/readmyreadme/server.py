from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable

from pygls.lsp.server import LanguageServer
from lsprotocol.types import (
    INITIALIZED,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_SAVE,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    WORKSPACE_DID_CHANGE_WATCHED_FILES,
    WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS,
    ConfigurationItem,
    ConfigurationParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeConfigurationParams,
    DidChangeTextDocumentParams,
    DidChangeWatchedFilesParams,
    DidChangeWorkspaceFoldersParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    InitializedParams,
    MessageType,
    Position,
    PositionEncodingKind,
    PublishDiagnosticsParams,
    Range,
    Registration,
    RegistrationParams,
    ShowMessageParams,
)

from readmyreadme import __version__
from readmyreadme.lint import lint_text, qualifies, span_positions, stale_notice, uri_to_path
from readmyreadme.observability import log_event, setup_logging
from readmyreadme.outline import OutlineDiagnostic
from readmyreadme.schema import ReadmeSettings
from readmyreadme.settings import CONFIGURATION_SECTION, SettingsStore, parse_settings

logger = logging.getLogger(__name__)

server = LanguageServer("readmyreadme", __version__)


@dataclass
class ServerState:
    store: SettingsStore = field(default_factory=SettingsStore)


state = ServerState()


def reset_state() -> None:
    global state
    state = ServerState()


def _supports_configuration(ls: LanguageServer) -> bool:
    capabilities = ls.client_capabilities
    workspace = capabilities.workspace if capabilities is not None else None
    return bool(workspace is not None and workspace.configuration)


def _position_encoding(ls: LanguageServer) -> str:
    encoding = ls.workspace.position_encoding
    if encoding is None:
        return PositionEncodingKind.Utf16.value
    return PositionEncodingKind(encoding).value


def _is_open(ls: LanguageServer, uri: str) -> bool:
    return uri in ls.workspace.text_documents


def to_lsp_diagnostic(
    text: str,
    diagnostic: OutlineDiagnostic,
    encoding: str = PositionEncodingKind.Utf16.value,
) -> Diagnostic:
    (start_line, start_col), (end_line, end_col) = span_positions(
        text, diagnostic.span, encoding
    )
    return Diagnostic(
        range=Range(
            start=Position(line=start_line, character=start_col),
            end=Position(line=end_line, character=end_col),
        ),
        message=diagnostic.message,
        severity=DiagnosticSeverity.Warning,
        code=diagnostic.kind.value,
        source=diagnostic.source,
    )


def _publish(
    ls: LanguageServer, uri: str, diagnostics: list[Diagnostic], version: int | None = None
) -> None:
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics, version=version)
    )


async def resolve_settings(ls: LanguageServer, uri: str) -> ReadmeSettings:
    if not _supports_configuration(ls):
        return state.store.global_settings
    cached = state.store.get(uri)
    if cached is not None:
        return cached
    result = await ls.workspace_configuration_async(
        ConfigurationParams(
            items=[ConfigurationItem(scope_uri=uri, section=CONFIGURATION_SECTION)]
        )
    )
    payload = result[0] if result else None
    settings = parse_settings(payload, fallback=state.store.global_settings)
    # The document may have been closed while the client answered.
    if _is_open(ls, uri):
        state.store.put(uri, settings)
    return settings


async def validate_document(ls: LanguageServer, uri: str) -> bool:
    """Publish the outline diagnostics of one open document.

    Returns whether the document qualified for linting; documents that do not
    qualify get an empty diagnostic list, and documents closed while their
    settings were being fetched get nothing.
    """
    document = ls.workspace.get_text_document(uri)
    settings = await resolve_settings(ls, uri)
    if not _is_open(ls, uri):
        return False
    diagnostics: list[Diagnostic] = []
    qualified = qualifies(uri, settings.document_patterns)
    if qualified:
        source = document.source
        encoding = _position_encoding(ls)
        diagnostics = [
            to_lsp_diagnostic(source, diagnostic, encoding)
            for diagnostic in lint_text(source, settings)
        ]
        log_event(logger, "validated", uri=uri, diagnostics=len(diagnostics))
    _publish(ls, uri, diagnostics, document.version)
    return qualified


@server.feature(INITIALIZED)
async def initialized(ls: LanguageServer, params: InitializedParams) -> None:
    if not _supports_configuration(ls):
        return
    await ls.client_register_capability_async(
        RegistrationParams(
            registrations=[
                Registration(
                    id=str(uuid.uuid4()),
                    method=WORKSPACE_DID_CHANGE_CONFIGURATION,
                )
            ]
        )
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
async def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    uri = params.text_document.uri
    if not await validate_document(ls, uri):
        return
    notice = stale_notice(uri_to_path(uri))
    if notice is not None:
        ls.window_show_message(ShowMessageParams(type=MessageType.Info, message=notice))


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
async def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    await validate_document(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_SAVE)
async def did_save(ls: LanguageServer, params: DidSaveTextDocumentParams) -> None:
    await validate_document(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LanguageServer, params: DidCloseTextDocumentParams) -> None:
    uri = params.text_document.uri
    state.store.forget(uri)
    _publish(ls, uri, [])


@server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
async def did_change_configuration(
    ls: LanguageServer, params: DidChangeConfigurationParams
) -> None:
    if _supports_configuration(ls):
        state.store.clear()
    else:
        settings = params.settings
        payload = settings.get(CONFIGURATION_SECTION) if isinstance(settings, dict) else None
        state.store.global_settings = parse_settings(payload)
    for uri in list(ls.workspace.text_documents):
        await validate_document(ls, uri)


@server.feature(WORKSPACE_DID_CHANGE_WATCHED_FILES)
def did_change_watched_files(ls: LanguageServer, params: DidChangeWatchedFilesParams) -> None:
    logger.debug("watched files changed: %d event(s)", len(params.changes))


@server.feature(WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS)
def did_change_workspace_folders(
    ls: LanguageServer, params: DidChangeWorkspaceFoldersParams
) -> None:
    event = params.event
    logger.info(
        "workspace folders changed: %d added, %d removed",
        len(event.added),
        len(event.removed),
    )


def start(start_fn: Callable[[], None] | None = None) -> None:
    """Start the language server on stdio."""
    setup_logging()
    (start_fn or server.start_io)()


if __name__ == "__main__":  # pragma: no cover
    start()  # pragma: no cover
