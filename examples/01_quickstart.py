"""
@01_quickstart.py

Simple demonstration of targetencode.
Configures a target encoder, checks a schema and encodes a small frame.
"""

import pandas as pd
from sklearn.model_selection import train_test_split

from targetencode import (
    BlendingSettings,
    HoldoutStrategy,
    Schema,
    SchemaValidationError,
    TargetEncoder,
    TargetEncoderConfig,
    configure_logging,
)


def main():
    """Simple demonstration of targetencode."""
    configure_logging(verbosity=2)
    print("=" * 50)
    print("targetencode - Quick Start Demo")
    print("=" * 50)

    df = pd.DataFrame(
        {
            "color": ["red", "red", "blue", "green", "blue", "red", "green", "blue"] * 25,
            "city": ["paris", "rome", "rome", "oslo", "paris", "oslo", "rome", "paris"] * 25,
            "label": [1, 0, 1, 0, 1, 1, 0, 0] * 25,
        }
    )
    df["fold"] = df.index % 5
    train, test = train_test_split(df, test_size=0.25, random_state=42)

    # 1. Configure the stage
    config = TargetEncoderConfig(inputCols=["color", "city"])
    config.set("holdoutStrategy", HoldoutStrategy.K_FOLD).set("foldCol", "fold")
    config.set("blending", BlendingSettings(inflection_point=10, smoothing=20))
    print(f"\n1. Output columns: {config.output_cols}")

    # 2. Validate the schema before touching data
    schema = Schema.from_frame(train)
    encoder = TargetEncoder(config=config)
    print(f"2. Output schema: {encoder.transform_schema(schema).names}")

    # 3. Encode
    encoded_train = encoder.fit_transform(train)
    encoded_test = encoder.transform(test)
    print("\n3. Encoded training rows:")
    print(encoded_train.head())
    print("\n   Encoded test rows:")
    print(encoded_test.head())

    # 4. Misconfiguration is caught up front
    bad = TargetEncoderConfig(inputCols=["colour"])
    try:
        TargetEncoder(config=bad).transform_schema(schema)
    except SchemaValidationError as e:
        print(f"\n4. [EXPECTED] {e}")


if __name__ == "__main__":
    main()
