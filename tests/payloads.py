from farmhome.models.animal import Animal
from farmhome.models.breeding import Breeding
from farmhome.models.health_record import HealthRecord
from farmhome.models.incident import Incident
from farmhome.models.order import Order
from farmhome.models.product import Product
from farmhome.models.quote import Quote
from farmhome.models.vaccination import Vaccination


# One valid create payload per tabular resource
VALID_PAYLOADS = {
    Animal: {
        'tagId': 'TAG-001',
        'breed': 'Angus',
        'gender': 'Female',
        'dob': '2021-03-15',
        'weight': 450,
        'condition': 'good',
        'status': 'active',
        'farmhouse': 'North Barn',
        'sireId': 'TAG-100',
        'acquisitionType': 'born',
        'acquisitionDate': '2021-03-15',
        'images': ['a.jpg', 'b.jpg'],
        'notes': 'healthy calf',
    },
    HealthRecord: {
        'animalTagId': 'TAG-001',
        'healthIssue': 'Lameness',
        'symptoms': 'Limping',
        'diagnosis': 'Hoof abscess',
        'treatment': 'Drained and wrapped',
        'veterinarian': 'Dr. Reyes',
        'treatmentDate': '2024-05-01',
        'followUpDate': '2024-05-15',
        'severity': 'moderate',
        'cost': 120.5,
        'status': 'treated',
        'notes': 'recheck in two weeks',
    },
    Vaccination: {
        'animalTagId': 'TAG-001',
        'vaccineName': 'Bovishield',
        'manufacturer': 'Zoetis',
        'batchNumber': 'B-778',
        'vaccinationType': 'viral',
        'dosage': '2ml',
        'administrationRoute': 'IM',
        'administeredBy': 'Sam',
        'treatmentDate': '2024-04-01',
        'expiryDate': '2025-04-01',
        'nextDueDate': '2025-04-01',
        'cost': 0,
        'status': 'done',
        'sideEffects': 'none',
        'notes': 'annual booster',
    },
    Breeding: {
        'sireTagId': 'TAG-100',
        'damTagId': 'TAG-001',
        'breedingDate': '2024-01-10',
        'breedingMethod': 'natural',
        'expectedDelivery': '2024-10-17',
        'actualDelivery': '2024-10-20',
        'numberOfOffspring': 1,
        'status': 'successful',
        'cost': 0,
        'performedBy': 'Sam',
        'notes': 'single calf',
    },
    Incident: {
        'incidentType': 'injury',
        'incidentDate': '2024-06-01T08:30:00Z',
        'description': 'Cut on left flank from fence wire',
        'animalTagId': 'TAG-001',
        'severity': 'minor',
    },
    Product: {
        'name': 'Mineral lick',
        'price': 12.5,
        'stock': 40,
        'category': 'feed',
    },
    Order: {
        'productId': 'prod-1',
        'quantity': 3,
        'totalPrice': 37.5,
        'customerName': 'Jo',
    },
    Quote: {
        'name': 'Jo Bloggs',
        'email': 'jo@example.com',
        'message': 'Price for 40 head of Angus?',
    },
}
