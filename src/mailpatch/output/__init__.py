"""Report renderers and the patch file writer."""
