from path_deconf import run_collision_check

# Ego path
ego_radius = 0.0
ego_path = [
    (1, 2),
    (2, 3)
]

# Surrounding agents: (radius, predicted path)
surroundings = [
    (0.0, [(4, 5), (5, 6)]),
    (0.0, [(6, 7), (7, 8)])
]


def main():
    # Run collision check
    result = run_collision_check(
        ego_radius=ego_radius,
        ego_path=ego_path,
        surroundings=surroundings
    )

    # Check result
    if result["collision"]:
        print("collision")
        hit = result["hit"]
        print(
            f"  Agent {hit['agent_index']}: "
            f"ego segment {hit['ego_segment']} / segment {hit['other_segment']} "
            f"(d={hit['distance']:.2f} < {hit['safe_distance']:.2f})"
        )
    else:
        print("No collision")

    return result["collision"]


if __name__ == "__main__":
    main()
