"""Interactive CLI simulator — exercise the OTP flow without an SMS gateway."""

import asyncio
import logging

from vidshare.otp.dev_probe import DevelopmentCodeProbe
from vidshare.otp.service import OTPService
from vidshare.otp.store import InMemoryOTPStore
from vidshare.services.notifier import LoggingNotifier

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
BOLD = "\033[1m"
RESET = "\033[0m"


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

    print(f"\n{BOLD}{'=' * 52}")
    print("  📱  vidshare — OTP Simulator")
    print(f"{'=' * 52}{RESET}\n")
    print(f"{DIM}Commands: 'send' to request a code, 'peek' to show the last code,{RESET}")
    print(f"{DIM}          'switch' to change number, 'quit' to exit.{RESET}")
    print(f"{DIM}          Anything else is checked as a code.{RESET}\n")

    probe = DevelopmentCodeProbe()
    service = OTPService(store=InMemoryOTPStore(), notifier=LoggingNotifier(), probe=probe)

    mobile = input(f"{YELLOW}Enter mobile number: {RESET}").strip() or "5550001234"
    print(f"{DIM}Simulating as {mobile}{RESET}\n")

    while True:
        try:
            user_input = input(f"{BLUE}{BOLD}You:{RESET} ").strip()
        except (KeyboardInterrupt, EOFError):
            print(f"\n{DIM}Goodbye!{RESET}")
            break

        if not user_input:
            continue

        command = user_input.lower()
        if command == "quit":
            print(f"{DIM}Goodbye!{RESET}")
            break

        if command == "switch":
            mobile = input(f"{YELLOW}Enter new mobile number: {RESET}").strip() or mobile
            print(f"{DIM}Now simulating as {mobile}{RESET}\n")
            continue

        if command == "send":
            await service.request_code(mobile)
            await service.drain()
            print(f"{GREEN}Code sent to {mobile}.{RESET}\n")
            continue

        if command == "peek":
            print(f"{DIM}Last issued code: {service.peek_last_issued_code()}{RESET}\n")
            continue

        if await service.verify(mobile, user_input):
            print(f"{GREEN}{BOLD}✅ Verified!{RESET}\n")
        else:
            print(f"{RED}❌ Invalid or expired code.{RESET}\n")

    await service.drain()


if __name__ == "__main__":
    asyncio.run(main())
