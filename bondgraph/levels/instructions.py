# Level instructions shown to the player. **text** marks bold segments.

HOW_TO_PLAY = """**How to Play:**
• Click pieces from the sidebar to place them
• Click two pieces to connect them
• Click a connection to remove it
• Connections cannot cross"""

LEVEL1_INSTRUCTIONS = f"""**Objective:**  Your ruler has tasked you with building a series of villages in a new territory. You must connect the villages to each other using roads, with each village requiring a certain number of roads depending on its size.

{HOW_TO_PLAY}
• All pieces can connect with each other

**Win Condition:**  All pieces placed and fully connected."""

LEVEL2_INSTRUCTIONS = f"""**Objective:**  You have been tasked with designing Sydney's public transport network. You must connect light rail, bus, train and metro stops to each other. Each stop requires a certain number of connections and each type of stop must be connected to at least one other stop of the same type.

{HOW_TO_PLAY}
• All pieces can connect with each other

**Win Condition:**  All pieces placed and fully connected. Each piece must have at least one same-type connection."""

LEVEL3_INSTRUCTIONS = f"""**Objective:**  Build a molecule of methanol. Every atom must form exactly as many bonds as its valence: carbon 4, oxygen 2, hydrogen 1.

{HOW_TO_PLAY}
• Atoms of the same element cannot bond with each other

**Win Condition:**  All atoms placed, every bond formed and the molecule in one piece."""
