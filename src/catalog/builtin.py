"""Bundled table of IntelliJ Platform releases.

Build numbers are the GA builds of each release line; later bugfix
releases share the branch. Replace or extend with --catalog.
"""

BUILTIN_RELEASES = [
    {"marketingVersion": "2021.3", "branch": 213, "build": 5744, "fix": 223,
     "releaseDate": "2021-11-30", "recommendedToolchain": "Java 11"},
    {"marketingVersion": "2022.1", "branch": 221, "build": 5080, "fix": 210,
     "releaseDate": "2022-04-12", "recommendedToolchain": "Java 11"},
    {"marketingVersion": "2022.2", "branch": 222, "build": 3345, "fix": 118,
     "releaseDate": "2022-07-26", "recommendedToolchain": "Java 17"},
    {"marketingVersion": "2022.3", "branch": 223, "build": 7571, "fix": 182,
     "releaseDate": "2022-11-30", "recommendedToolchain": "Java 17"},
    {"marketingVersion": "2023.1", "branch": 231, "build": 8109, "fix": 175,
     "releaseDate": "2023-03-29", "recommendedToolchain": "Java 17"},
    {"marketingVersion": "2023.2", "branch": 232, "build": 8660, "fix": 185,
     "releaseDate": "2023-07-26", "recommendedToolchain": "Java 17"},
    {"marketingVersion": "2023.3", "branch": 233, "build": 11799, "fix": 241,
     "releaseDate": "2023-12-06", "recommendedToolchain": "Java 17"},
    {"marketingVersion": "2024.1", "branch": 241, "build": 14494, "fix": 240,
     "releaseDate": "2024-04-04", "recommendedToolchain": "Java 17"},
    {"marketingVersion": "2024.2", "branch": 242, "build": 20224, "fix": 300,
     "releaseDate": "2024-08-07", "recommendedToolchain": "Java 21"},
    {"marketingVersion": "2024.3", "branch": 243, "build": 21565, "fix": 193,
     "releaseDate": "2024-11-13", "recommendedToolchain": "Java 21"},
    {"marketingVersion": "2025.1", "branch": 251, "build": 23774, "fix": 435,
     "releaseDate": "2025-04-15", "recommendedToolchain": "Java 21"},
    {"marketingVersion": "2025.2", "branch": 252, "build": 23892, "fix": 409,
     "releaseDate": "2025-07-29", "recommendedToolchain": "Java 21"},
]
