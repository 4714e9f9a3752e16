"""Entry point for the lumer-order Textual storefront."""

from __future__ import annotations

from lumer_order.storefront_app import StorefrontApp


def main() -> None:
    StorefrontApp().run()


if __name__ == "__main__":
    main()
