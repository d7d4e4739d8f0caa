"""Domain layer: schema descriptors, the declared catalog and the apply loop."""
