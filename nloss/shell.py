"""Command dispatcher and interactive shell over a bank of image buffers."""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .buffer import BufferBank, validate_slot
from .constants import NUM_SLOTS
from .errors import InvalidParameterError, NlossError
from .io import read_image, write_image
from .metrics import bmp_layout, calculate_psnr, calculate_rmse, channel_means
from .ops import absolute, cutoff, fit, flip, grayscale, invert, level, quantize
from .transform import Axis, TransformKind, apply_transform

logger = logging.getLogger(__name__)

# Flags accepted across commands: name -> help text
FLAG_HELP = {
    '-n': f"choose one of {NUM_SLOTS} (0 - {NUM_SLOTS - 1}) image slots (default = 0)",
    '-s': "mandatory size parameter for the command (no default)",
    '-sx': "x-size (block width) parameter (default = image width)",
    '-sy': "y-size (block height) parameter (default = image height)",
}

_FLAG_FIELDS = {'-n': 'slot', '-s': 'size', '-sx': 'block_width', '-sy': 'block_height'}

_AXIS_MESSAGES = {
    Axis.HORIZONTAL: "Image transformed along horizontal axis",
    Axis.VERTICAL: "Image transformed along vertical axis",
    Axis.BOTH: "Image transformed along both axes",
}


@dataclass
class CommandOptions:
    """Validated options for one command invocation."""

    slot: int = 0
    block_width: Optional[int] = None
    block_height: Optional[int] = None
    axis: Axis = Axis.HORIZONTAL
    size: Optional[int] = None
    positional: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.slot = validate_slot(self.slot)
        self.axis = Axis.parse(self.axis)
        for name in ('block_width', 'block_height', 'size'):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise InvalidParameterError(f"{name} must be positive, got {value}")


@dataclass
class CommandResult:
    ok: bool
    message: str


@dataclass
class Command:
    handler: Callable[[CommandOptions], str]
    description: str
    usage: str = ""
    flags: Tuple[str, ...] = ()
    positional: int = 0


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors instead of exiting."""

    def error(self, message):
        raise InvalidParameterError(f"{self.prog}: {message}")


def parse_options(name: str, args: List[str], flags: Iterable[str] = ('-n',),
                  positional: int = 0, axis_from_positional: bool = False) -> CommandOptions:
    """
    Parse command arguments into CommandOptions.

    Args:
        name: Command name (used in error messages)
        args: Tokens following the command name
        flags: Flags the command accepts
        positional: Maximum number of positional arguments
        axis_from_positional: Read the first positional as the axis token

    Raises:
        InvalidParameterError: On unknown flags, non-integer values, too many
            positionals or values out of range
    """
    parser = _OptionParser(prog=name, add_help=False, allow_abbrev=False)
    parser.add_argument('positional', nargs='*')
    for flag in flags:
        parser.add_argument(flag, dest=_FLAG_FIELDS[flag], type=int)

    namespace = parser.parse_intermixed_args(args)
    values = {k: v for k, v in vars(namespace).items() if v is not None}
    extra = values.pop('positional', [])

    if len(extra) > positional:
        raise InvalidParameterError(
            f"{name}: unexpected arguments: {' '.join(extra[positional:])}")

    if axis_from_positional and extra:
        values['axis'] = extra[0]

    return CommandOptions(positional=extra, **values)


class CommandShell:
    """
    Dispatches text commands to buffer operations.

    Every command returns a CommandResult; toolkit errors are turned into
    failed results so that one bad command never stops the shell or touches
    other slots.
    """

    def __init__(self, bank: Optional[BufferBank] = None):
        self.bank = bank if bank is not None else BufferBank()
        self.commands: Dict[str, Command] = {}
        self.running = True
        self._register_builtin_commands()

    def register_command(self, name: str, handler: Callable[[CommandOptions], str],
                         description: str = "", usage: str = "",
                         flags: Tuple[str, ...] = ('-n',), positional: int = 0) -> None:
        self.commands[name] = Command(handler, description, usage, tuple(flags), positional)

    def execute(self, line: str) -> CommandResult:
        """
        Parse and run one command line.

        Tokens are separated by whitespace only; quotes and backslashes are
        kept as part of file names.
        """
        tokens = line.split()
        if not tokens:
            return CommandResult(True, "")

        name, args = tokens[0], tokens[1:]
        command = self.commands.get(name)
        if command is None:
            return CommandResult(
                False, f"Unknown command: {name}. Type 'help' for available commands.")

        try:
            options = parse_options(
                name, args, command.flags, command.positional,
                axis_from_positional=name in _TRANSFORM_COMMANDS)
            message = command.handler(options)
        except NlossError as e:
            logger.debug("Command %r failed: %s", line, e)
            return CommandResult(False, f"Error: {e}")
        except Exception as e:
            logger.exception("Unexpected error executing %r", line)
            return CommandResult(False, f"Error executing command '{name}': {e}")

        return CommandResult(True, message)

    def run_lines(self, lines: Iterable[str], echo: bool = False) -> int:
        """
        Execute commands non-interactively.

        Returns:
            Number of failed commands
        """
        failures = 0
        for line in lines:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            if echo:
                print(f"> {line}")
            result = self.execute(line)
            _report(result)
            if not result.ok:
                failures += 1
            if not self.running:
                break
        return failures

    def run(self) -> None:
        """Interactive read-eval loop on stdin."""
        print("nLoss Started. Type 'help' for available commands.")
        print("Supported format: 24-bit uncompressed BMP files")

        while self.running:
            try:
                line = input("> ")
            except EOFError:
                break
            if line.strip():
                _report(self.execute(line))

    # Command handlers

    def _handle_load(self, options: CommandOptions) -> str:
        filename = _require_positional(options, "load <filename.bmp>")
        buffer = read_image(filename, self.bank[options.slot])
        return f"Successfully loaded BMP image: {filename}\n{buffer.info()}"

    def _handle_save(self, options: CommandOptions) -> str:
        filename = _require_positional(options, "save <filename.bmp>")
        write_image(self.bank[options.slot], filename)
        return f"Successfully saved BMP image: {filename}"

    def _handle_info(self, options: CommandOptions) -> str:
        buffer = self.bank[options.slot]
        if not buffer.loaded:
            return buffer.info()

        means = channel_means(buffer)
        layout = bmp_layout(buffer.width, buffer.height)
        return "\n".join([
            buffer.info(),
            "Average RGB values: ({}, {}, {})".format(*(int(m) for m in means)),
            "BMP format details:",
            f"  Row padding: {layout['row_padding']} bytes",
            f"  Row size: {layout['row_size']} bytes",
            f"  Image data size: {layout['image_data_size']} bytes",
            f"  Total file size: {layout['file_size']} bytes",
        ])

    def _handle_clear(self, options: CommandOptions) -> str:
        self.bank[options.slot].clear()
        return f"Slot {options.slot} cleared"

    def _handle_copy(self, options: CommandOptions) -> str:
        target = _slot_argument(options, "copy <target slot>")
        self.bank[target].copy_from(self.bank[options.slot])
        return f"Copied slot {options.slot} to slot {target}"

    def _handle_compare(self, options: CommandOptions) -> str:
        other = _slot_argument(options, "compare <other slot>")
        a, b = self.bank[options.slot], self.bank[other]
        rmse = calculate_rmse(a, b)
        psnr = calculate_psnr(a, b)
        return f"RMSE: {rmse:.4f}, PSNR: {psnr:.2f} dB"

    def _handle_invert(self, options: CommandOptions) -> str:
        invert(self.bank[options.slot])
        return "Image colors inverted"

    def _handle_grayscale(self, options: CommandOptions) -> str:
        grayscale(self.bank[options.slot])
        return "Image converted to grayscale"

    def _handle_flip(self, options: CommandOptions) -> str:
        direction = options.positional[0] if options.positional else 'horizontal'
        direction = flip(self.bank[options.slot], direction)
        return f"Image flipped {direction}ly"

    def _handle_abs(self, options: CommandOptions) -> str:
        absolute(self.bank[options.slot])
        return "Taken absolute value"

    def _handle_quantize(self, options: CommandOptions) -> str:
        quantize(self.bank[options.slot], _require_size(options))
        return "Quantized"

    def _handle_cutoff(self, options: CommandOptions) -> str:
        cutoff(self.bank[options.slot], _require_size(options))
        return "Cutoff Applied"

    def _handle_level(self, options: CommandOptions) -> str:
        level(self.bank[options.slot], options.block_width, options.block_height)
        return "Image Levelled"

    def _handle_fit(self, options: CommandOptions) -> str:
        fit(self.bank[options.slot])
        return "Image fitted to [0, 255]"

    def _transform_handler(self, kind: TransformKind) -> Callable[[CommandOptions], str]:
        def handler(options: CommandOptions) -> str:
            axis = apply_transform(self.bank[options.slot], kind, options.axis,
                                   options.block_width, options.block_height)
            return _AXIS_MESSAGES[axis]
        return handler

    def _handle_help(self, options: CommandOptions) -> str:
        lines = ["Available commands:"]
        for name in sorted(self.commands):
            cmd = self.commands[name]
            lines.append(f"  {name} - {cmd.description}")
            if cmd.usage:
                lines.append(f"    Usage: {cmd.usage}")
                lines.append(f"    Flags: {' '.join(cmd.flags) or 'NONE'}")
        lines.append("")
        lines.append("Flag guide:")
        for flag, text in FLAG_HELP.items():
            lines.append(f"{flag} :: {text}")
        lines.append("")
        lines.append("Supported format: 24-bit uncompressed BMP files")
        lines.append("Image is kept as a complex matrix, cast to 8-bit integers when saving")
        return "\n".join(lines)

    def _handle_exit(self, options: CommandOptions) -> str:
        self.running = False
        return "Goodbye!"

    def _register_builtin_commands(self) -> None:
        reg = self.register_command
        reg('load', self._handle_load, "Load image from BMP file into a slot",
            "load <filename.bmp>", positional=1)
        reg('save', self._handle_save, "Save a slot to a BMP file",
            "save <filename.bmp>", positional=1)
        reg('info', self._handle_info, "Show information about a slot", "info")
        reg('clear', self._handle_clear, "Release the image held in a slot", "clear")
        reg('copy', self._handle_copy, "Copy a slot into another slot",
            "copy <target slot>", positional=1)
        reg('compare', self._handle_compare, "RMSE and PSNR between two slots",
            "compare <other slot>", positional=1)
        reg('invert', self._handle_invert, "Invert colors of the image", "invert")
        reg('grayscale', self._handle_grayscale, "Convert the image to grayscale", "grayscale")
        reg('flip', self._handle_flip, "Flip image horizontally or vertically",
            "flip [horizontal | vertical]", positional=1)
        reg('abs', self._handle_abs, "Replace each sample with its absolute value", "abs")
        reg('quant', self._handle_quantize, "Quantize real parts to multiples of s",
            "quant -s [int]", flags=('-n', '-s'))
        reg('cutoff', self._handle_cutoff,
            "Replace value with 0 if absolute value is not greater than s",
            "cutoff -s [int]", flags=('-n', '-s'))
        reg('level', self._handle_level, "Average each block",
            "level -sx [int] -sy [int]", flags=('-n', '-sx', '-sy'))
        reg('fit', self._handle_fit, "Clamp and floor samples to byte values", "fit")

        for kind in TransformKind:
            reg(kind.value, self._transform_handler(kind),
                f"{kind.description} along one or both axes",
                f"{kind.value} [h | v | d]", flags=('-n', '-sx', '-sy'), positional=1)

        reg('help', self._handle_help, "Show available commands", flags=())
        reg('exit', self._handle_exit, "Exit the program", flags=())
        reg('quit', self._handle_exit, "Exit the program", flags=())


_TRANSFORM_COMMANDS = frozenset(kind.value for kind in TransformKind)


def _require_positional(options: CommandOptions, usage: str) -> str:
    if not options.positional:
        raise InvalidParameterError(f"Missing argument. Usage: {usage}")
    return options.positional[0]


def _slot_argument(options: CommandOptions, usage: str) -> int:
    token = _require_positional(options, usage)
    try:
        slot = int(token)
    except ValueError:
        raise InvalidParameterError(f"Slot must be an integer, got {token!r}") from None
    return validate_slot(slot)


def _require_size(options: CommandOptions) -> int:
    if options.size is None:
        raise InvalidParameterError("Size not given (use -s)")
    return options.size


def _report(result: CommandResult) -> None:
    if not result.message:
        return
    if result.ok:
        print(result.message)
    else:
        print(result.message, file=sys.stderr)
