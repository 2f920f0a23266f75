"""Dashboard aggregation

Builds the /dashboard payload in memory from full animal and breeding
listings plus two precomputed counts.
"""
from farmhome.utils.dates import months_between

AGE_GROUPS = ['0-6 months', '6-12 months', '1-2 years', '2-4 years', '4+ years']


def get_age_group(dob, now):
    """Bucket an animal by whole calendar months since its date of birth"""
    age_months = months_between(dob, now)
    if age_months < 6:
        return '0-6 months'
    if age_months < 12:
        return '6-12 months'
    if age_months < 24:
        return '1-2 years'
    if age_months < 48:
        return '2-4 years'
    return '4+ years'


def _lower(value):
    return value.lower() if isinstance(value, str) else None


def breeding_summary(breedings):
    successful = failed = in_progress = 0
    for record in breedings:
        status = _lower(record.get('status'))
        if status == 'successful':
            successful += 1
        elif status == 'failed':
            failed += 1
        else:
            in_progress += 1
    success_rate = round(successful / len(breedings) * 100) if breedings else 0
    return {
        'successful': successful,
        'failed': failed,
        'inProgress': in_progress,
        'successRate': success_rate,
    }


def cull_suggestions(animals, now):
    """Animals aged 6+ calendar years or in poor condition"""
    suggestions = []
    for animal in animals:
        poor = _lower(animal.get('condition')) == 'poor'
        dob = animal.get('dob')
        old = dob is not None and now.year - dob.year >= 6
        if poor or old:
            suggestions.append({
                'tagId': animal.get('tagId'),
                'reason': 'Poor condition' if poor else 'Age 6+ years',
            })
    return suggestions


def breeding_suggestions(animals, now):
    """Females aged 1-4 calendar years in good condition"""
    suggestions = []
    for animal in animals:
        dob = animal.get('dob')
        if dob is None:
            continue
        age_years = now.year - dob.year
        if (1 <= age_years <= 4
                and _lower(animal.get('condition')) == 'good'
                and animal.get('gender') == 'Female'):
            suggestions.append({'tagId': animal.get('tagId'), 'reason': 'Optimal age, good condition'})
    return suggestions


def build_dashboard(animals, breedings, health_incidents, active_users, now):
    """Assemble the dashboard payload

    Args:
        animals: Every animal document
        breedings: Every breeding document
        health_incidents: Number of incidents in the last month
        active_users: Number of users that are not blocked
        now: Reference time (naive UTC)
    """
    age_groups = {group: 0 for group in AGE_GROUPS}
    sex_groups = {'Male': 0, 'Female': 0}
    breed_groups = {}

    for animal in animals:
        if animal.get('dob') is not None:
            group = get_age_group(animal['dob'], now)
            age_groups[group] += 1
        gender = animal.get('gender')
        sex_groups[gender] = sex_groups.get(gender, 0) + 1
        breed = animal.get('breed')
        breed_groups[breed] = breed_groups.get(breed, 0) + 1

    breeding = breeding_summary(breedings)

    return {
        'stats': [
            {'title': 'Total Animals', 'value': len(animals)},
            {'title': 'Breeding Success Rate', 'value': f"{breeding['successRate']}%"},
            {'title': 'Health Incidents (last month)', 'value': health_incidents},
            {'title': 'Active Users', 'value': active_users},
        ],
        'ageDistribution': [{'ageGroup': group, 'count': count} for group, count in age_groups.items()],
        'sexDistribution': [{'sex': sex, 'count': count} for sex, count in sex_groups.items()],
        'breedDistribution': [{'breed': breed, 'count': count} for breed, count in breed_groups.items()],
        'breeding': breeding,
        'suggestions': {
            'culling': cull_suggestions(animals, now),
            'breeding': breeding_suggestions(animals, now),
        },
    }
