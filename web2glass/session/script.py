"""Session script messages: newline-delimited JSON driving one app session"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, TextIO

logger = logging.getLogger(__name__)


class ScriptMessageType(Enum):
    """Types of session script messages"""

    CONNECT = "connect"
    ACTION = "action"
    WEB_ACTION = "web_action"
    BRIDGE_EVENT = "bridge_event"
    WAIT = "wait"


@dataclass
class ScriptMessage:
    """One scripted step"""

    msg_type: ScriptMessageType
    payload: Dict[str, Any]

    def json_serialize(self) -> str:
        """
        Serialize message to JSON string

        Returns:
            Single-line JSON text.
        """
        data = {"msg_type": self.msg_type.value, "payload": self.payload}
        return json.dumps(data)

    @staticmethod
    def json_deserialize(data: str) -> "ScriptMessage":
        """
        Deserialize message from JSON string

        Args:
            data: JSON string

        Returns:
            Deserialized ScriptMessage object

        Raises:
            ValueError: If the text is not JSON, the type is unknown or the
                payload is not an object
            KeyError: If `msg_type` is missing
        """
        parsed = json.loads(data)
        msg_type = ScriptMessageType(parsed["msg_type"])
        payload = parsed.get("payload") or {}
        if not isinstance(payload, dict):
            raise ValueError(f"Payload of '{msg_type.value}' must be a JSON object")
        return ScriptMessage(msg_type=msg_type, payload=payload)


class ScriptMessageBuilder:
    """Builds session script messages"""

    @staticmethod
    def connectMessage_create() -> ScriptMessage:
        """Create connect message"""
        return ScriptMessage(msg_type=ScriptMessageType.CONNECT, payload={})

    @staticmethod
    def actionMessage_create() -> ScriptMessage:
        """Create main-action message"""
        return ScriptMessage(msg_type=ScriptMessageType.ACTION, payload={})

    @staticmethod
    def webActionMessage_create(name: str, *args: Any) -> ScriptMessage:
        """
        Create panel action message

        Args:
            name: Panel action name.
            *args: Positional action arguments.

        Returns:
            Web action message.
        """
        return ScriptMessage(
            msg_type=ScriptMessageType.WEB_ACTION,
            payload={"name": name, "args": list(args)},
        )

    @staticmethod
    def bridgeEventMessage_create(raw: Dict[str, Any]) -> ScriptMessage:
        """
        Create bridge event message

        Args:
            raw: Raw bridge payload delivered as-is.

        Returns:
            Bridge event message.
        """
        return ScriptMessage(msg_type=ScriptMessageType.BRIDGE_EVENT, payload=dict(raw))

    @staticmethod
    def waitMessage_create(ms: int) -> ScriptMessage:
        """Create wait message"""
        return ScriptMessage(msg_type=ScriptMessageType.WAIT, payload={"ms": ms})


class ScriptParser:
    """Parses newline-delimited script text into messages"""

    def __init__(self) -> None:
        """Initialize with empty buffer"""
        self.buffer: str = ""
        self.errors: list[str] = []

    def chunk_feed(self, chunk: str) -> list[ScriptMessage]:
        """
        Add text and return every complete message it finished.

        Args:
            chunk: Script text, possibly ending mid-line.

        Returns:
            Messages parsed from complete lines.
        """
        self.buffer += chunk
        return self.bufferMessages_parse()

    def bufferMessages_parse(self) -> list[ScriptMessage]:
        """
        Parse newline-delimited messages from internal buffer.

        Blank lines and lines starting with `#` are skipped. Unparseable
        lines are logged and recorded in `errors`.

        Returns:
            List of successfully parsed messages.
        """
        messages: list[ScriptMessage] = []
        while "\n" in self.buffer:
            line: str
            line, self.buffer = self.buffer.split("\n", 1)
            message = self.line_parse(line)
            if message is not None:
                messages.append(message)
        return messages

    def remainder_flush(self) -> list[ScriptMessage]:
        """Parse a final line that has no trailing newline"""
        line: str = self.buffer
        self.buffer = ""
        message = self.line_parse(line)
        return [message] if message is not None else []

    def line_parse(self, line: str) -> "ScriptMessage | None":
        stripped: str = line.strip()
        if not stripped or stripped.startswith("#"):
            return None
        try:
            message: ScriptMessage = ScriptMessage.json_deserialize(stripped)
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Failed to parse script line: %s", exc)
            self.errors.append(f"{stripped}: {exc}")
            return None
        logger.debug("Script step: %s", message.msg_type.value)
        return message


def scriptLines_parse(lines: Iterable[str]) -> tuple[list[ScriptMessage], list[str]]:
    """
    Parse a whole script.

    Args:
        lines: Script lines (with or without newlines).

    Returns:
        Tuple of (messages, parse errors).
    """
    parser = ScriptParser()
    messages: list[ScriptMessage] = []
    for line in lines:
        messages.extend(parser.chunk_feed(line if line.endswith("\n") else f"{line}\n"))
    messages.extend(parser.remainder_flush())
    return messages, parser.errors


def scriptStream_parse(stream: TextIO) -> tuple[list[ScriptMessage], list[str]]:
    """Parse a script from an open text stream"""
    return scriptLines_parse(stream)
