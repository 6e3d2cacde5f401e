# configs/filters_config.py
from typing import List, Tuple

# (id, name, expression, description)
VINTAGE_FILTERS: List[Tuple[str, str, str, str]] = [
    ("blue-jeans", "Blue Jeans",
     "brightness(95%) contrast(135%) saturate(0%) grayscale(100%) sepia(5%) blur(0.3px)",
     "Black and white film noir with crushed blacks and a soft faded contrast"),
    ("born-to-die", "Born to Die",
     "brightness(100%) contrast(125%) saturate(95%) hue-rotate(340deg) sepia(10%) blur(0.4px)",
     "Oil painting elegance with creamy skin and muted pastel background"),
    ("west-coast", "West Coast",
     "brightness(95%) contrast(140%) saturate(0%) grayscale(100%) sepia(5%) blur(0.2px)",
     "Raw 35mm black and white with glowing highlights and gritty texture"),
    ("young-beautiful", "Young & Beautiful",
     "brightness(105%) contrast(110%) saturate(85%) hue-rotate(340deg) sepia(15%) blur(0.6px)",
     "Old Hollywood still with candlelight glow and soft focus"),
    ("summertime-sadness", "Summertime Sadness",
     "brightness(102%) contrast(85%) saturate(75%) hue-rotate(20deg) sepia(25%) blur(0.4px)",
     "Warm golden 1970s mood with muted pastels and matte blacks"),
    ("honeymoon", "Honeymoon",
     "brightness(105%) contrast(75%) saturate(80%) hue-rotate(10deg) sepia(15%) blur(0.6px)",
     "VHS postcard look with washed-out pastel colors"),
    ("love", "Love",
     "brightness(115%) contrast(85%) saturate(85%) hue-rotate(340deg) sepia(25%) blur(0.5px)",
     "Overexposed glow with lifted shadows and milky highlights"),
    ("cherry", "Cherry",
     "brightness(100%) contrast(90%) saturate(0%) grayscale(100%) sepia(10%) blur(0.35px)",
     "1960s monochrome television with faded blacks and muted whites"),
    ("venice-bitch", "Venice Bitch",
     "brightness(102%) contrast(85%) saturate(90%) hue-rotate(25deg) sepia(25%) blur(0.5px)",
     "Super-8 sunset tones with lifted shadows"),
    ("brooklyn-baby", "Brooklyn Baby",
     "brightness(110%) contrast(135%) saturate(0%) grayscale(100%) sepia(5%) blur(0.2px)",
     "Sharp black and white with glowing skin and a soft S-curve"),
    ("shades-of-cool", "Shades of Cool",
     "brightness(75%) contrast(125%) saturate(130%) hue-rotate(280deg) sepia(20%) blur(0.4px)",
     "Dark neon VHS with deep shadows and cyan/magenta tint"),
    ("ultraviolence", "Ultraviolence",
     "brightness(130%) contrast(70%) saturate(80%) hue-rotate(15deg) sepia(30%) blur(0.5px)",
     "Blown-out highlights with warm haze and soft focus"),
    ("terrence-loves-you", "Terrence Loves You",
     "brightness(97%) contrast(110%) saturate(95%) hue-rotate(45deg) sepia(15%) blur(0.35px)",
     "Moody golden warmth with lifted shadows"),
    ("mariners-apartment-complex", "Mariners Apartment Complex",
     "brightness(100%) contrast(85%) saturate(0%) grayscale(100%) sepia(15%) blur(0.5px)",
     "Washed-out 16mm black and white with soft contrast"),
    ("norman-rockwell", "Norman Rockwell",
     "brightness(100%) contrast(80%) saturate(85%) hue-rotate(50deg) sepia(15%) blur(0.45px)",
     "Flat film with muted colors and a creamy warm tint"),
    ("salvatore", "Salvatore",
     "brightness(105%) contrast(95%) saturate(90%) hue-rotate(330deg) sepia(20%) blur(0.5px)",
     "Candy-colored faded pastel postcard"),
    ("video-games", "Video Games",
     "brightness(95%) contrast(90%) saturate(75%) hue-rotate(330deg) sepia(25%) blur(0.6px)",
     "Home-video nostalgia with muted tones and faded glow"),
    ("white-mustang", "White Mustang",
     "brightness(105%) contrast(70%) saturate(70%) hue-rotate(320deg) sepia(20%) blur(0.6px)",
     "Heavily faded blacks with pinkish highlights"),
    ("high-by-the-beach", "High by the Beach",
     "brightness(105%) contrast(85%) saturate(90%) hue-rotate(280deg) sepia(15%) blur(0.4px)",
     "Cool blue/magenta pastel with lifted blacks"),
    ("national-anthem", "National Anthem",
     "brightness(105%) contrast(70%) saturate(90%) hue-rotate(320deg) sepia(25%) blur(0.7px)",
     "Super 8 reel with overexposed glow and warm magenta tint"),
    ("art-deco", "Art Deco",
     "brightness(102%) contrast(110%) saturate(110%) hue-rotate(30deg) sepia(10%) blur(0.3px)",
     "Pastel elegance with peach-pink highlights"),
    ("motel-6-acoustic", "Motel 6 Acoustic",
     "brightness(103%) contrast(70%) saturate(90%) hue-rotate(45deg) sepia(30%) blur(0.8px)",
     "Strong warm yellow wash with faded blacks and heavy haze"),
]

ADVANCED_FILTERS: List[Tuple[str, str, str, str]] = [
    ("blue-jeans-advanced", "Blue Jeans (Advanced)",
     "brightness(92%) contrast(140%) saturate(0%) grayscale(100%) sepia(8%) blur(0.4px)",
     "Deeper crushed blacks than Blue Jeans"),
    ("west-coast-advanced", "West Coast (Advanced)",
     "brightness(92%) contrast(145%) saturate(0%) grayscale(100%) sepia(8%) blur(0.25px)",
     "Deeper crushed blacks than West Coast"),
    ("born-to-die-advanced", "Born to Die (Advanced)",
     "brightness(98%) contrast(130%) saturate(100%) hue-rotate(335deg) sepia(15%) blur(0.5px)",
     "Stronger vintage grading than Born to Die"),
]

# Value ranges for manual adjustments: (minimum, maximum, neutral)
ADJUSTMENT_RANGES = {
    "brightness": (0.0, 200.0, 100.0),
    "contrast": (0.0, 200.0, 100.0),
    "saturation": (0.0, 200.0, 100.0),
    "temperature": (-100.0, 100.0, 0.0),
    "grain": (0.0, 100.0, 0.0),
    "fade": (0.0, 100.0, 0.0),
    "vignette": (0.0, 100.0, 0.0),
}
TEMPERATURE_HUE_DEGREES = 1.8  # hue-rotate degrees per temperature unit
