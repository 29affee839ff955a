"""Command-line interface for csvseal."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from colorama import Fore, Style, init as colorama_init

from . import __version__
from .config import ENCRYPTED_SUFFIX, Config, load_config
from .encryption import (
    check_output,
    decrypt_file,
    default_decrypt_output,
    encrypt_file,
    input_size,
    verify_file,
)
from .prompts import prompt_new_password, prompt_password
from .utils import CsvSealError, format_bytes, setup_logging


def _command_showcase() -> List[Tuple[str, str]]:
    return [
        ("encrypt [input] [-o output]", "Encrypt a file (default command)"),
        ("decrypt [input] [-o output]", "Decrypt an .enc file"),
        ("verify [input]", "Check that a password opens an .enc file"),
        ("help", "Show this help"),
    ]


def _print_command_help(title: str) -> None:
    print(f"{Fore.CYAN}🔐 CSV File Encryption Tool {__version__}{Style.RESET_ALL}")
    print(title)
    print("Usage: csvseal <command> [options]")
    print("\nAvailable commands:\n")
    for command, label in _command_showcase():
        print(f"  {command:<30} - {label}")
    print("\nExamples:")
    print("  csvseal                                 # contacts.csv -> contacts.csv.enc")
    print("  csvseal encrypt data.csv -o data.csv.enc")
    print("  csvseal decrypt contacts.csv.enc --force")
    print("")


class _FriendlyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        _print_command_help(f"{Fore.RED}Error:{Style.RESET_ALL} {message}")
        raise SystemExit(2)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = _FriendlyArgumentParser(
        prog="csvseal", description="Password-based file encryption")
    subparsers = parser.add_subparsers(dest="command")

    encrypt_parser = subparsers.add_parser("encrypt", help="Encrypt a file")
    encrypt_parser.add_argument("input", nargs="?", type=Path, help="Plaintext file")
    encrypt_parser.add_argument("-o", "--output", type=Path, help="Encrypted file")

    decrypt_parser = subparsers.add_parser("decrypt", help="Decrypt a file")
    decrypt_parser.add_argument("input", nargs="?", type=Path, help="Encrypted file")
    decrypt_parser.add_argument("-o", "--output", type=Path, help="Plaintext file")
    decrypt_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing output file")

    verify_parser = subparsers.add_parser("verify", help="Verify a password")
    verify_parser.add_argument("input", nargs="?", type=Path, help="Encrypted file")

    subparsers.add_parser("help", help="Show help and usage examples")

    return parser.parse_args(argv)


def command_encrypt(args: argparse.Namespace, config: Config) -> None:
    """
    Handle encrypt command.
    """
    input_path = getattr(args, "input", None) or config.input_file
    if getattr(args, "output", None):
        output_path = args.output
    elif getattr(args, "input", None):
        output_path = input_path.with_name(input_path.name + ENCRYPTED_SUFFIX)
    else:
        output_path = config.output_file

    print(f"{Fore.CYAN}🔐 CSV File Encryption Tool{Style.RESET_ALL}\n")
    check_output(input_path, output_path)
    size = input_size(input_path)
    print(f"📄 Found: {input_path} ({format_bytes(size)})\n")

    password = prompt_new_password(config.min_password_length)
    print("\n🔄 Encrypting...\n")
    result = encrypt_file(input_path, output_path, password)

    print(f"{Fore.GREEN}✅ Encryption successful!{Style.RESET_ALL}")
    print(f"📁 Input:  {result.input_path}")
    print(f"📁 Output: {result.output_path}")
    print(f"🔐 File size: {format_bytes(result.output_size)}")
    print(f"\n{Fore.YELLOW}⚠️  IMPORTANT:{Style.RESET_ALL}")
    print(f'   1. Add "{input_path.name}" to your .gitignore')
    print(f'   2. Only commit "{output_path.name}" to git')
    print("   3. Use the same password to decrypt")


def command_decrypt(args: argparse.Namespace, config: Config) -> None:
    """
    Handle decrypt command.
    """
    input_path = args.input or config.output_file
    output_path = args.output or default_decrypt_output(input_path)

    check_output(input_path, output_path, args.force)
    size = input_size(input_path)
    print(f"📄 Found: {input_path} ({format_bytes(size)})\n")
    password = prompt_password()
    print("\n🔄 Decrypting...\n")
    result = decrypt_file(input_path, output_path, password, overwrite=args.force)

    print(f"{Fore.GREEN}✅ Decryption successful!{Style.RESET_ALL}")
    print(f"📁 Output: {result.output_path} ({format_bytes(result.output_size)})")
    print(f"{Fore.YELLOW}⚠️  Keep {result.output_path.name} out of git.{Style.RESET_ALL}")


def command_verify(args: argparse.Namespace, config: Config) -> None:
    """
    Handle verify command.
    """
    input_path = args.input or config.output_file
    input_size(input_path)
    password = prompt_password()
    plaintext_size = verify_file(input_path, password)
    print(
        f"{Fore.GREEN}✅ Password verified.{Style.RESET_ALL} "
        f"{input_path} holds {format_bytes(plaintext_size)} of data."
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit code.
    """
    colorama_init()
    args = parse_arguments(argv)

    if args.command == "help":
        _print_command_help("csvseal CLI Help")
        return 0

    try:
        config = load_config()
        setup_logging(config.log_level)
        if args.command in (None, "encrypt"):
            command_encrypt(args, config)
        elif args.command == "decrypt":
            command_decrypt(args, config)
        elif args.command == "verify":
            command_verify(args, config)
    except CsvSealError as exc:
        print(f"\n{Fore.RED}❌ {exc}{Style.RESET_ALL}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print(f"\n\n{Fore.RED}❌ Operation cancelled{Style.RESET_ALL}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
