"""Step-by-step 3D assembly viewer for bead pattern keychains."""
