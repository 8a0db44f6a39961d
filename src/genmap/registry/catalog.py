"""
Built-in model catalog.

Entries use the same document shape as a catalog YAML file (see
``load_registry_yaml``) so both go through one builder. Transform steps are
referenced by name only; custom functions live in
``genmap.mapping.transforms.CUSTOM_FUNCTIONS``.
"""

from __future__ import annotations

from typing import Any, Dict, List

PROMPT_RULE = {"to": "prompt", "from": ["prompt_process", "prompt"], "transform": [{"op": "coalesce"}]}

OUTPUT_FORMAT_RULE = {
    "to": "output_format", "from": "output_format",
    "transform": [{"op": "enumMap", "map": {"png": "png", "jpg": "jpeg", "jpeg": "jpeg"}, "default": "png"}],
}

SEED_RULES = [
    {"to": "seed", "from": "seed", "when": {"equals": ["randomize_seed", False]}, "transform": [{"op": "toNumber"}]},
    {"to": "seed", "when": {"not": {"equals": ["randomize_seed", False]}}, "transform": [{"op": "randomInt"}]},
]

BASE_IMAGE_RULES: List[Dict[str, Any]] = [
    PROMPT_RULE,
    {"to": "image_size.width", "from": "width", "transform": [{"op": "toNumber"}]},
    {"to": "image_size.height", "from": "height", "transform": [{"op": "toNumber"}]},
    {"to": "enable_safety_checker", "from": "enable_safety_checker"},
    OUTPUT_FORMAT_RULE,
    {"to": "image_url", "from": "control_images", "transform": [{"op": "pick", "index": 0}]},
]

BASE_IMAGE_ASPECT_RULES: List[Dict[str, Any]] = [
    PROMPT_RULE,
    {"to": "aspect_ratio", "from": "aspect_ratio"},
    {"to": "enable_safety_checker", "from": "enable_safety_checker"},
    OUTPUT_FORMAT_RULE,
    {"to": "image_url", "from": "control_images", "transform": [{"op": "pick", "index": 0}]},
]

BASE_VIDEO_RULES: List[Dict[str, Any]] = [
    PROMPT_RULE,
    {"to": "image_url", "from": "control_images", "transform": [{"op": "pick", "index": 0}]},
    {"to": "enable_safety_checker", "from": "enable_safety_checker"},
]

ALL_ASPECT_RATIOS = ["1:1", "3:4", "4:3", "2:3", "3:2", "4:5", "5:4", "16:9", "9:16", "21:9", "9:21"]

NUM_OUTPUTS_PARAM = {
    "name": "num_outputs", "label": "Number", "type": "select", "defaultValue": "1",
    "description": "Number of images to generate.",
    "options": [{"value": str(n), "label": str(n)} for n in range(1, 5)],
}

RESOLUTION_PARAM = {
    "name": "resolution", "label": "Resolution", "type": "select", "defaultValue": "480p",
    "description": "Choose the resolution of the video.",
    "options": [{"value": "480p", "label": "480p"}, {"value": "720p", "label": "720p"}],
}

START_IMAGE = {"name": "control_images", "label": "Start Image", "type": "image", "isRequired": True, "isSupport": 1}


def _without(rules: List[Dict[str, Any]], target: str) -> List[Dict[str, Any]]:
    return [r for r in rules if r["to"] != target]


FLUX_SERIES: List[Dict[str, Any]] = [
    {
        "id": "flux-schnell",
        "label": "Flux schnell",
        "description": "Flux schnell model for image generation",
        "tag": ["Text to Image"],
        "badge": ["Free to try"],
        "type": "image",
        "provider": ["fal"],
        "useCredits": 0.03,
        "supportedAspectRatios": ALL_ASPECT_RATIOS,
        "customParameters": [NUM_OUTPUTS_PARAM],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/flux/schnell",
            "rules": BASE_IMAGE_RULES + [
                {"to": "num_images", "from": "num_outputs", "transform": [{"op": "toNumber"}]},
            ],
        },
    },
    {
        "id": "flux-dev",
        "label": "flux dev",
        "description": "Balanced version with good quality-speed ratio",
        "tag": ["Text to Image"],
        "type": "image",
        "provider": ["fal"],
        "useCredits": 0.3,
        "supportedAspectRatios": ALL_ASPECT_RATIOS,
        "customParameters": [NUM_OUTPUTS_PARAM],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/flux/dev",
            "rules": BASE_IMAGE_RULES + SEED_RULES + [
                {"to": "num_images", "from": "num_outputs", "transform": [{"op": "toNumber"}]},
                {"to": "num_inference_steps", "const": 28},
                {"to": "guidance_scale", "const": 3.5},
            ],
        },
    },
    {
        "id": "flux-dev-kontext-image-edit",
        "label": "Flux dev Kontext Edit",
        "description": "Flux dev kontext model for image editing",
        "tag": ["Image to Image"],
        "badge": ["Image Edit"],
        "type": "image",
        "provider": ["fal"],
        "useCredits": 0.25,
        "supportedAspectRatios": ["auto"] + ALL_ASPECT_RATIOS,
        "supportAddFiles": [{"name": "control_images", "label": "Image", "type": "image", "isRequired": True, "isSupport": 1}],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/flux-kontext/dev",
            "rules": BASE_IMAGE_ASPECT_RULES,
        },
    },
    {
        "id": "flux-dev-kontext-image-edit-lora",
        "label": "Flux dev Kontext Edit (Lora)",
        "description": "Flux dev kontext model for image editing",
        "tag": ["Image to Image"],
        "badge": ["Image Edit"],
        "type": "image",
        "provider": ["fal"],
        "useCredits": 0.35,
        "supportedAspectRatios": ["auto"] + ALL_ASPECT_RATIOS,
        "supportAddFiles": [{"name": "control_images", "label": "Image", "type": "image", "isRequired": True, "isSupport": 1}],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/flux-kontext-lora/text-to-image",
            "rules": BASE_IMAGE_ASPECT_RULES + [
                {"to": "loras", "from": "meta_data.adapter_model", "transform": [{"op": "array"}]},
            ],
        },
    },
    {
        "id": "flux-krea-dev",
        "label": "flux krea dev",
        "description": "Optimized for realistic images",
        "tag": ["Image to Image"],
        "badge": ["Image Edit"],
        "type": "image",
        "provider": ["fal"],
        "useCredits": 0.4,
        "supportedAspectRatios": ALL_ASPECT_RATIOS,
        "supportAddFiles": [{"name": "control_images", "label": "Image", "type": "image", "isRequired": True, "isSupport": 2}],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/flux-pro/kontext/multi",
            "rules": _without(BASE_IMAGE_ASPECT_RULES, "image_url") + [
                {"to": "safety_tolerance", "const": "5"},
                {"to": "image_urls", "from": "control_images", "transform": [{"op": "slice", "start": 0, "end": 2}]},
            ],
        },
    },
]

IMAGE_TOOL_SERIES: List[Dict[str, Any]] = [
    {
        "id": "iclight-v2-relight",
        "label": "IC-Light Relight",
        "description": "Relight a subject with a directional light preset",
        "tag": ["Image to Image"],
        "badge": ["Relight", "Image Edit"],
        "type": "image",
        "provider": ["fal"],
        "useCredits": 1,
        "promptIgnore": True,
        "supportAddFiles": [{"name": "control_images", "label": "Relight Image", "type": "image", "isRequired": True, "isSupport": 1}],
        "customParameters": [
            {
                "name": "light_type", "label": "Light Type", "type": "select", "defaultValue": "None",
                "description": "Choose the type of light to apply.",
                "options": [
                    {"value": "None", "label": "None"},
                    {"value": "Left", "label": "Left Light"},
                    {"value": "Right", "label": "Right Light"},
                    {"value": "Bottom", "label": "Bottom Light"},
                    {"value": "Top", "label": "Top Light"},
                ],
            },
        ],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/iclight-v2",
            "rules": BASE_IMAGE_RULES + [
                {"to": "initial_latent", "from": "meta_data.light_type", "transform": [{"op": "default", "value": "None"}]},
            ],
        },
    },
]

TEXT_TO_VIDEO_SERIES: List[Dict[str, Any]] = [
    {
        "id": "wan2-2-turbo-text2video",
        "label": "Wan2.2 Turbo",
        "description": "Fast, cinematic videos",
        "tag": ["Text to Video"],
        "badge": ["Fast"],
        "type": "video",
        "provider": ["fal"],
        "useCredits": 0.5,
        "supportedAspectRatios": ["16:9", "9:16", "1:1"],
        "customParameters": [RESOLUTION_PARAM],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/wan/v2.2-a14b/text-to-video",
            "rules": BASE_VIDEO_RULES + [
                {"to": "aspect_ratio", "from": "aspect_ratio", "transform": [{"op": "default", "value": "16:9"}]},
                {"to": "resolution", "from": "resolution", "transform": [{"op": "default", "value": "480p"}]},
            ],
        },
    },
    {
        "id": "hailuo-2-standard-text2video",
        "label": "Hailuo 2 Standard",
        "description": "Motion-rich text to video",
        "tag": ["Text to Video"],
        "badge": ["Motion", "Fast"],
        "type": "video",
        "provider": ["fal"],
        "useCredits": 3,
        "supportedAspectRatios": ["16:9", "9:16", "1:1"],
        "customParameters": [
            {
                "name": "duration", "label": "Duration", "type": "select", "defaultValue": "6",
                "description": "Choose the duration of the video.",
                "options": [{"value": "6", "label": "6 s"}, {"value": "10", "label": "10 s"}],
            },
        ],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/minimax/hailuo-02/standard/text-to-video",
            "rules": _without(BASE_VIDEO_RULES, "enable_safety_checker") + [
                {"to": "duration", "from": "duration", "transform": [{"op": "toString"}, {"op": "default", "value": "5"}]},
            ],
        },
    },
]

IMAGE_TO_VIDEO_SERIES: List[Dict[str, Any]] = [
    {
        "id": "wan2-2-turbo-image2video",
        "label": "Wan2.2 Turbo",
        "description": "Fast, cinematic videos",
        "tag": ["Image to Video"],
        "badge": ["Fast"],
        "type": "video",
        "provider": ["fal"],
        "useCredits": 0.5,
        "supportedAspectRatios": ["auto", "16:9", "9:16", "1:1"],
        "supportAddFiles": [START_IMAGE],
        "customParameters": [RESOLUTION_PARAM],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/wan/v2.2-a14b/image-to-video/turbo",
            "rules": BASE_VIDEO_RULES + [
                {"to": "aspect_ratio", "from": "aspect_ratio", "transform": [{"op": "default", "value": "auto"}]},
                {"to": "resolution", "from": "resolution", "transform": [{"op": "default", "value": "480p"}]},
            ],
        },
    },
    {
        "id": "seedance-v1-lite-image2video",
        "label": "Seedance V1 Lite",
        "description": "Start/end frame image to video",
        "tag": ["Image to Video"],
        "badge": ["Start/End Frame"],
        "type": "video",
        "provider": ["fal"],
        "useCredits": 1,
        "supportedAspectRatios": ["auto", "16:9", "9:16", "1:1"],
        "supportAddFiles": [
            START_IMAGE,
            {"name": "control_images_2", "label": "End Image", "type": "image", "isRequired": False, "isSupport": 1},
        ],
        "customParameters": [
            {
                "name": "camera_fixed", "label": "Camera Fixed", "type": "switch", "defaultValue": False,
                "description": "Choose the camera fixed of the video.",
            },
        ],
        "apiInput": {
            "provider": "fal",
            "endpoint": "fal-ai/bytedance/seedance/v1/lite/image-to-video",
            "rules": BASE_VIDEO_RULES + [
                {"to": "duration", "from": "duration", "transform": [{"op": "toString"}, {"op": "default", "value": "5"}]},
                {"to": "resolution", "from": "resolution", "transform": [{"op": "default", "value": "720p"}]},
                {"to": "end_image_url", "fromFile": {"name": "control_images_2", "index": 0, "use": "url"}},
                {"to": "camera_fixed", "from": "meta_data.camera_fixed", "transform": [{"op": "default", "value": False}]},
            ],
        },
    },
]

HOT_MODEL_IDS = ["wan2-2-turbo-image2video", "flux-krea-dev", "flux-dev-kontext-image-edit"]

# series name -> model documents; "hot" is filled in by the registry from HOT_MODEL_IDS
CATALOG: Dict[str, List[Dict[str, Any]]] = {
    "flux.1": FLUX_SERIES,
    "image tool": IMAGE_TOOL_SERIES,
    "text to video": TEXT_TO_VIDEO_SERIES,
    "image to video": IMAGE_TO_VIDEO_SERIES,
}
