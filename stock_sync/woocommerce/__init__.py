"""WooCommerce REST access: catalog loading and stock updates."""
