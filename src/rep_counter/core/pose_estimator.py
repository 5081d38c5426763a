"""
pose_estimator.py - MoveNet Pose Estimation
===========================================
Handles MoveNet SinglePose model loading and inference.
"""

import numpy as np
import cv2

from ..exercises.base import KeypointFrame, NUM_KEYPOINTS


class PoseEstimator:
    """
    Handles MoveNet SinglePose model loading and inference.
    Produces one KeypointFrame per captured frame.
    """

    INPUT_SIZE = 192  # Lightning; Thunder uses 256

    def __init__(self, model_path: str, input_size: int = INPUT_SIZE):
        """
        Initialize the pose estimator with a MoveNet model.

        Args:
            model_path: Path to the SavedModel directory, .tflite, or .onnx file
            input_size: Square input resolution expected by the model
        """
        self.model_path = model_path
        self.input_size = input_size

        if model_path.endswith('.onnx'):
            import onnxruntime as ort
            print(f"🔹 [PoseEstimator] Loading MoveNet SinglePose ONNX model: {model_path}")
            self.ort_session = ort.InferenceSession(model_path, providers=['CPUExecutionProvider'])
            self.model_type = 'onnx'
        elif model_path.endswith('.tflite'):
            import tensorflow as tf
            print(f"🔹 [PoseEstimator] Loading MoveNet SinglePose TFLite model: {model_path}")
            self.interpreter = tf.lite.Interpreter(model_path=model_path)
            self.interpreter.allocate_tensors()
            self.input_details = self.interpreter.get_input_details()
            self.output_details = self.interpreter.get_output_details()
            self.model_type = 'tflite'
        else:
            import tensorflow as tf
            print(f"🔹 [PoseEstimator] Loading MoveNet SinglePose SavedModel: {model_path}")
            self.model = tf.saved_model.load(model_path)
            self.movenet = self.model.signatures['serving_default']
            self.model_type = 'tf'

        print("✅ [PoseEstimator] Model loaded successfully!")

    def _preprocess_frame(self, frame: np.ndarray) -> np.ndarray:
        """
        Preprocess frame for MoveNet inference.

        Args:
            frame: BGR image from OpenCV

        Returns:
            Preprocessed array ready for inference
        """
        img = cv2.resize(frame, (self.input_size, self.input_size))
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)

        if self.model_type == 'tflite':
            return np.expand_dims(img.astype(self.input_details[0]['dtype']), axis=0)
        return np.expand_dims(img.astype(np.int32), axis=0)

    def infer(self, frame: np.ndarray) -> np.ndarray:
        """
        Run MoveNet inference on frame.

        Returns:
            (17, 3) array of normalized [y, x, score]
        """
        input_data = self._preprocess_frame(frame)

        if self.model_type == 'onnx':
            input_name = self.ort_session.get_inputs()[0].name
            output = self.ort_session.run(None, {input_name: input_data})[0]
        elif self.model_type == 'tflite':
            self.interpreter.set_tensor(self.input_details[0]['index'], input_data)
            self.interpreter.invoke()
            output = self.interpreter.get_tensor(self.output_details[0]['index'])
        else:
            import tensorflow as tf
            output = self.movenet(tf.convert_to_tensor(input_data))['output_0'].numpy()

        # [1, 1, 17, 3] -> [17, 3]
        return np.asarray(output).reshape((NUM_KEYPOINTS, 3))

    def estimate(self, frame: np.ndarray) -> KeypointFrame:
        """Run inference and return keypoints in the frame's pixel space."""
        h, w = frame.shape[:2]
        return KeypointFrame.from_movenet(self.infer(frame), w, h)
