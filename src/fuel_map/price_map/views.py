"""
Views for the fuel price map: the upload page and a JSON API
"""
import logging

from django.shortcuts import render
from django.views import View
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .forms import CsvUploadForm
from .map_builder import build_price_map, render_map_document
from .serializers import CsvUploadSerializer, ParseResultSerializer
from .services import ForecourtCsvService

logger = logging.getLogger('price_map')


class PriceMapView(View):
    """
    Upload page with the forecourt map.

    GET shows an empty map of the UK; POST reads the uploaded CSV and plots
    it. The upload is discarded once the response is rendered.
    """
    template_name = 'price_map/index.html'

    def get(self, request):
        return self._render(request, CsvUploadForm())

    def post(self, request):
        form = CsvUploadForm(request.POST, request.FILES)
        if not form.is_valid():
            logger.warning(f"Invalid upload: {form.errors.as_json()}")
            return self._render(request, form, status_code=400)

        uploaded = form.cleaned_data['csv_file']
        try:
            result = ForecourtCsvService().parse_upload(uploaded)
        except ValueError as e:
            # Rejected file: show the message and an empty map
            return self._render(request, form, file_name=uploaded.name, parse_error=str(e))

        return self._render(
            request,
            form,
            file_name=result.file_name,
            parse_error=result.error,
            result=result,
        )

    def _render(self, request, form, file_name='', parse_error=None, result=None, status_code=200):
        points = result.points if result else []
        price_range = result.price_range if result else None
        price_map = build_price_map(points, price_range)
        context = {
            'form': form,
            'file_name': file_name,
            'parse_error': parse_error,
            'stats': result.stats if result else None,
            'map_html': render_map_document(price_map),
        }
        return render(request, self.template_name, context, status=status_code)


class ForecourtUploadView(APIView):
    """
    POST endpoint returning the parsed forecourts as JSON.

    Endpoint: POST /api/forecourts/  (multipart, field "file")

    Response:
        {
            "file_name": "prices.csv",
            "error": null,
            "stats": {"count": 2, "brands": 2},
            "price_range": {"low": 1.399, "high": 1.529},
            "points": [...]
        }
    """

    def post(self, request):
        """Parse an uploaded forecourt CSV"""
        serializer = CsvUploadSerializer(data=request.data)

        if not serializer.is_valid():
            logger.warning(f"Invalid request: {serializer.errors}")
            return Response(
                {
                    'error': 'Invalid request',
                    'details': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            result = ForecourtCsvService().parse_upload(serializer.validated_data['file'])
            return Response(ParseResultSerializer(result).data, status=status.HTTP_200_OK)

        except ValueError as e:
            # Client errors (not a CSV, unreadable file)
            logger.warning(f"Client error: {str(e)}")
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        except Exception as e:
            logger.error(f"Unexpected error: {str(e)}", exc_info=True)
            return Response(
                {'error': 'Internal server error. Please try again later.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


class HealthCheckView(APIView):
    """Health check endpoint"""

    def get(self, request):
        """Simple health check"""
        return Response({'status': 'healthy'}, status=status.HTTP_200_OK)
