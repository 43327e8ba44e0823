# budsim

`budsim` provides parts of a mechanical model of a budding membrane. The
membrane is a closed triangulated surface whose nodes are joined by edge
springs. The package computes the forces and energies of a single
configuration:

- edge springs and the line tension on boundary edges,
- turgor pressure along the triangle normals,
- Morse repulsion between nodes that are not neighbours,
- Morse and 12-6 Lennard-Jones coupling to free particles.

It also computes the enclosed volume, moves nodes forward by one explicit
time step and reads the XML mesh scheme that describes the starting
surface.

Node positions and forces are NumPy arrays of shape `(N, 3)`. Edges and
triangles are given as sequences or arrays of node indices. The index
`2**31 - 1` marks an unused slot and is skipped.

## Modules

| Module | What it provides |
| --- | --- |
| `budsim.vectors` | Helpers for 3-vectors held as tuples: `cross`, `multiply`, `scale`, `divide`, `dot`, `add`, `add_scalar`, `subtract`, `norm`, `inner_product` and `difference_sum_magnitude`. Also `torsion_angle` (the angle at a centre node), `strain_or_zero`, in-place scatter-adding of force contributions (`scatter_add_forces` skips rows that contain NaN; `scatter_add_forces_bounded` skips ids at or above a limit), and the seeded random values `normal_sample` and `uniform_sample`. |
| `budsim.advance` | `advance_positions`: free nodes move by `dt * force`, and fixed nodes move only in x and y by `dt / mass * force`. `recenter_positions`: free nodes move by `dt / mass * force`, and fixed nodes stay where they are. Both return a new array. |
| `budsim.linear` | Edge springs. `ScaleType` (`GAUSSIAN`, `POWER`, `LINEAR`, `UPPER_HEMISPHERE`, `HILL`) and `LinearSpringSettings` choose how an edge's stiffness is weakened, and `edge_spring_constant` applies that choice. `compute_linear_springs` returns `(forces, energy)`. `linear_spring_energy` counts only stretched edges. `compute_line_tension` returns `(forces, energy)` for the boundary edges flagged `1`. |
| `budsim.lennard_jones` | `lj_energy` is the 12-6 energy within a cutoff. `lj_membrane_forces` returns the Morse forces on the nodes, the reaction force on the particle and the energy. Attraction acts only on nodes in the upper hemisphere; repulsion acts below `rmin`. `lj_particle_interactions` gives the repulsion between particles. |
| `budsim.volume` | `triangle_volume` and `compute_volume`. For a closed surface whose triangles face outward, the sum equals six times the enclosed volume. |
| `budsim.turgor` | `turgor_forces`: each triangle pushes its three nodes along its unit normal with `spring_constant * area / 3`. |
| `budsim.repulsion_forces` | `universal_repulsion_force` gives the Morse repulsion on one node from every node closer than `abs_rmin`, leaving out the node's first nine neighbours. `apply_universal_repulsion` returns a force array with this repulsion added for every node. |
| `budsim.repulsion_energy` | `node_repulsion_energy` and `total_repulsion_energy`: the Morse repulsion energy with second-ring neighbours, using up to twelve neighbour slots per node. |
| `budsim.params` | Parameter dataclasses (`GeneralParams`, `DomainParams`, `LJParams`, `LinearSpringParams`, `AreaTriangleParams`, `BendingTriangleParams`, `CapsidParams`) that hold the model's defaults. `Mesh` holds positions, forces, fixed flags and connectivity, and checks their shapes. It provides `node_count()` and `zero_forces()`. |
| `budsim.scheme` | `parse_scheme` and `load_scheme` read a mesh scheme into a `MeshScheme` and raise `SchemeError` on malformed input. `parse_run_args` reads `-dt=` and `-solve_time=` options into `RunOptions`; the last argument is taken as the scheme file. `output_file_name` appends a UTC time stamp to a name. `format_elapsed` formats a run time as hours, minutes and seconds. |

## Mesh schemes

A scheme is an XML document whose root element is `<data>`. A document
with any other root gives an empty `MeshScheme`. The sections are:

- `<settings>`: optional constants `Tau`, `KBT`, `Linear_Const`,
  `Area_Const`, `Bend_Const`, `LJ_Eps`, `LJ_Rmin`, `LJ_Rmax`, `LJ_Const`,
  `LJ_X`, `LJ_Y` and `LJ_Z`. They are stored in `MeshScheme.settings`
  under lower-case names such as `tau`, `kbt` and `lj_eps`.
- `<nodes>`: one `<node>` per vertex, written as `x y z`.
- `<edgeinfos>`: one `<edgeinfo>` per edge, written as two node indices.
- `<elems>`: one `<elem>` per triangle, written as three node indices.
- `<elem2edges>`: one `<elem2edge>` per triangle, giving its three edges.
- `<edge2elems>`: one `<edge2elem>` per edge, giving its two triangles.

Indices in the file start at 1, and the parser converts them to indices
that start at 0.

```python
from budsim.scheme import load_scheme, SchemeError

try:
    scheme = load_scheme("membrane.xml")
except SchemeError as exc:
    print(f"cannot use scheme: {exc}")
else:
    print(len(scheme.nodes), "nodes,", len(scheme.elements), "triangles")
```

## A small example

```python
import numpy as np
from budsim.volume import compute_volume

# A unit corner tetrahedron with outward-facing triangles.
positions = np.array([
    [0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, 0.0, 1.0],
])
triangles = [(0, 2, 1), (0, 1, 3), (0, 3, 2), (1, 2, 3)]

print(compute_volume(positions, triangles))  # about 1.0, six times the volume of 1/6
```

## What the package does not do

`budsim` has no command-line program and no complete simulation loop.
It does not build a system from a scheme, compute area or bending forces,
remesh or swap edges, or write results to disk. `parse_run_args` and
`output_file_name` only prepare options and names. Calling the force
routines and combining their results is left to your own code.

## Testing

The tests use pytest. Install it through the `test` extra and run `pytest`.