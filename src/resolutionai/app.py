# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Train-if-missing, then predict one issue typed at the console."""
from __future__ import annotations

from .config import AppConfig
from .console import MLConsole
from .evaluation.evaluate import evaluate
from .features import build_pipeline
from .inference.predictor import predict
from .schemas import EvaluationMetrics, ModelSchema, PredictionRequest, PredictionResult
from .store import exists as model_exists
from .store import load as load_model
from .store import save as save_model
from .training.dataset import load as load_dataset
from .training.trainer import TrainedModel, fit

TITLE_PROMPT = "Enter a title:"
DESCRIPTION_PROMPT = "Enter a description:"

SAMPLE_ISSUE = PredictionRequest(
    title="EN LAS NOTAS DEBITO Y CREDITO DE CXC, SE REPITE EL ANCABEZADO POR CADA TRASACCION",
    description=(
        "ENTRADA: PASO 1. USUARIO DEL SISTEMA: 18420303 SEDE: HOSPITAL PRINCIPAL "
        "//CLIC EN ACEPTAR PROCESO: PASO 2.  IR AL PILAR AMARILLO ADMINISTRATIVO PASO 3. IR AL "
        "MODULO CARTERA PASO 4. ABRIR EL NODO NOTA CREDITO O NOTA DEBITO ACTIVAR FECHA INICIAL "
        "01-02-2020  FECHA FINAL: FECHA ACTUAL CLIC EN EL BOTON BUSCAR SELECCIONAR LA NOTA DEBITO  "
        "1083  CLIC EN VER Y CLIC EN IMPRIMIR EN NOTA CREDITO HACER EL MISMO EJERCICIO PERO ESCOGER "
        "LA NOTA CREDITO 79752 RESULTADO OBTENIDO: SE MUESTRA EL ENCABEZADO POR NUMERO DE CXC Y "
        "CONCEPTO POR SEPARADO REPITIENDO EL ENCABEZADO POR CADA TRANSACCION HACIENDO QUE SE IMPRIMA "
        "INFORMACION REPETIDA POR CADA TRANSACCION."
    ),
)


def train_evaluate_and_save(config: AppConfig, console: MLConsole) -> tuple[TrainedModel, EvaluationMetrics]:
    training_view = load_dataset(config.train_path, has_header=True, separator=config.separator)
    console.info(f"training rows={len(training_view)} file={config.train_path}")

    pipeline = build_pipeline(cache=config.cache)
    model = fit(
        pipeline,
        training_view,
        seed=config.seed,
        max_iter=config.max_iter,
        regularization=config.regularization,
    )
    console.success(f"model trained: labels={len(model.labels)} version={model.model_version}")

    sample = predict(model, SAMPLE_ISSUE)
    console.prediction(
        sample,
        title=SAMPLE_ISSUE.title,
        description=SAMPLE_ISSUE.description,
        heading="Single prediction, freshly trained model",
    )

    test_view = load_dataset(config.test_path, has_header=True, separator=config.separator)
    metrics = evaluate(model, test_view)
    console.metrics_table(metrics.as_dict(), title="Multiclass classification metrics: test data")

    path = save_model(model, ModelSchema(), config.model_path)
    console.success(f"model saved: {path}")
    return model, metrics


def read_request(console: MLConsole) -> PredictionRequest:
    title = console.prompt(TITLE_PROMPT)
    description = console.prompt(DESCRIPTION_PROMPT)
    return PredictionRequest(title=title, description=description)


def run(
    config: AppConfig,
    console: MLConsole,
    *,
    request: PredictionRequest | None = None,
) -> PredictionResult:
    console.info(f"base_dir={config.base_dir}")
    if not model_exists(config.model_path):
        console.warn(f"no model at {config.model_path}, training a new one")
        train_evaluate_and_save(config, console)
    else:
        console.info(f"using existing model {config.model_path}")

    model, schema = load_model(config.model_path)
    if request is None:
        request = read_request(console)
    result = predict(model, request, schema=schema)
    console.prediction(result, title=request.title, description=request.description, heading="Single prediction")
    return result
