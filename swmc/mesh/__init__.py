from swmc.mesh.decoder import decode_mesh, load_mesh

__all__ = ["decode_mesh", "load_mesh"]
