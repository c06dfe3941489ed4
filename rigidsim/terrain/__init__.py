"""Grid terrain built from cells, with contact queries and surface meshes."""