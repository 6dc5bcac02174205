# src/serialbox/config.py

# Files written by the demos, relative to the working directory
BOX_FILE = "box.ser"
LINE_COUNT_FILE = "line-count.ser"
POEM_FILE = "poem.txt"

BOX_CONTENT = 214748364

POEM = "Fodor Ákos – 3 negatív szó\n\nNINCS\nSEMMI\nBAJ.\n"

TEXT_ENCODING = "utf-8"
